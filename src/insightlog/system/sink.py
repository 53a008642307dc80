"""Sink estruturado da plataforma e fallback de console.

O sink padrão encaminha cada linha para o módulo ``logging`` no nível
correspondente à severidade. Qualquer objeto com ``emit(severity, line)``
pode ser injetado no lugar.
"""

import logging
import sys
from typing import Protocol

from .severity import Severity

logger = logging.getLogger(__name__)

DEFAULT_SINK_LOGGER = "insightlog.sink"


class StructuredSink(Protocol):
    """Destino estruturado de cada linha renderizada.

    Recebe o próprio ``Severity`` em vez da tag textual; a tag continua
    disponível em ``severity.tag`` e o nível em ``severity.logging_level``.
    """

    def emit(self, severity: Severity, line: str) -> None: ...


class LoggingSink:
    """Encaminha linhas renderizadas para um ``logging.Logger``."""

    def __init__(self, target: logging.Logger | str | None = None) -> None:
        if isinstance(target, logging.Logger):
            self._logger = target
        else:
            self._logger = logging.getLogger(target or DEFAULT_SINK_LOGGER)

    @property
    def logger(self) -> logging.Logger:
        return self._logger

    def emit(self, severity: Severity, line: str) -> None:
        self._logger.log(Severity(severity).logging_level, line.rstrip("\n"))


def console_fallback(line: str) -> None:
    """Escreve a linha em stderr em melhor esforço. Nunca lança exceção."""
    try:
        stream = sys.stderr
        if stream is None:
            return
        stream.write(f"[insightlog] {line}" if line.endswith("\n") else f"[insightlog] {line}\n")
        stream.flush()
    except Exception:
        # nosec B110 - terminal best-effort path
        pass


def report(sink: StructuredSink | None, severity: Severity, message: str) -> None:
    """Reporta uma falha interna pelo sink, caindo para stderr se necessário."""
    logger.debug("report: %s", message)
    if sink is None:
        console_fallback(message)
        return
    try:
        sink.emit(severity, message)
    except Exception as exc:
        logger.debug("report: sink falhou: %s", exc, exc_info=True)
        console_fallback(message)
