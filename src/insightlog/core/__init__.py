"""Pacote core: fachada pública e parsing de argumentos."""

from .center import InsightCenter

__all__ = ["InsightCenter"]
