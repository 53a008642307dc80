"""Níveis de severidade e suas tags canônicas.

Cada severidade possui uma tag curta usada na linha renderizada e um nível
numérico do módulo ``logging`` usado pelo sink estruturado padrão.
"""

import enum
import logging

TRACE_LEVEL = 5
NOTICE_LEVEL = 25

logging.addLevelName(TRACE_LEVEL, "TRACE")
logging.addLevelName(NOTICE_LEVEL, "NOTICE")


class Severity(enum.IntEnum):
    """Conjunto ordenado de severidades suportadas."""

    TRACE = 0
    INFO = 1
    NOTICE = 2
    WARNING = 3
    ERROR = 4
    CRITICAL = 5

    @property
    def tag(self) -> str:
        return _TAGS[self]

    @property
    def logging_level(self) -> int:
        return _LOGGING_LEVELS[self]

    @classmethod
    def from_name(cls, name: str) -> "Severity":
        """Converte nome ou tag (sem diferenciar maiúsculas) em Severity.

        Aceita tanto ``warning`` quanto a tag ``WARN``. Lança ``ValueError``
        para valores desconhecidos.
        """
        key = str(name or "").strip().upper()
        if key in cls.__members__:
            return cls[key]
        for sev, t in _TAGS.items():
            if t == key:
                return sev
        raise ValueError(f"severidade desconhecida: {name!r}")


_TAGS = {
    Severity.TRACE: "TRACE",
    Severity.INFO: "INFO",
    Severity.NOTICE: "NOTICE",
    Severity.WARNING: "WARN",
    Severity.ERROR: "ERROR",
    Severity.CRITICAL: "CRITICAL",
}

_LOGGING_LEVELS = {
    Severity.TRACE: TRACE_LEVEL,
    Severity.INFO: logging.INFO,
    Severity.NOTICE: NOTICE_LEVEL,
    Severity.WARNING: logging.WARNING,
    Severity.ERROR: logging.ERROR,
    Severity.CRITICAL: logging.CRITICAL,
}


def tag(severity: Severity) -> str:
    """Retorna a tag canônica da severidade (ex.: WARNING -> "WARN")."""
    return Severity(severity).tag
