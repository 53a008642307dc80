"""insightlog: logger de diagnóstico em processo.

Serializa entradas de log para um arquivo rotativo, espelha cada linha no
módulo ``logging`` e empacota logs recentes e contexto do host em um único
arquivo compartilhável.
"""

from .core.center import InsightCenter
from .system.severity import Severity

__all__ = ["InsightCenter", "Severity"]

__version__ = "0.1.0"
