"""Fachada pública do insightlog.

``InsightCenter`` é uma instância construída explicitamente e com ciclo de
vida próprio: possui o arquivo ativo, a fila de escrita e o construtor de
relatórios. Quem precisa de log recebe a instância por injeção.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from ..config.settings import get_settings, validate_settings
from ..system.archive import ArchiveBuilder
from ..system.compression import Compressor, ZipUtilityCompressor
from ..system.environment import EnvironmentProvider, PsutilEnvironment
from ..system.locator import directory_for, log_file_for
from ..system.rotation import RotationManager
from ..system.severity import Severity
from ..system.sink import LoggingSink, StructuredSink
from ..system.writer import WriteSerializer

logger = logging.getLogger(__name__)

_DEFAULT = object()


class InsightCenter:
    """Logger de diagnóstico com rotação e relatório compactado.

    Parâmetros omitidos usam os padrões: ``LoggingSink`` como sink,
    ``PsutilEnvironment`` como provedor de contexto (se habilitado em
    settings) e ``ZipUtilityCompressor`` para compressão. Passar ``None``
    em ``sink`` ou ``environment`` desativa o colaborador.
    """

    def __init__(
        self,
        app_name: Optional[str] = None,
        settings: Optional[dict] = None,
        sink=_DEFAULT,
        environment=_DEFAULT,
        compressor: Optional[Compressor] = None,
    ) -> None:
        if settings is None:
            cfg = get_settings({"app_name": app_name})
        else:
            merged = dict(settings)
            if app_name:
                merged["app_name"] = app_name
            cfg = validate_settings(merged)
        self._settings = cfg
        self._app_name: str = cfg["app_name"]

        self._sink: Optional[StructuredSink] = LoggingSink() if sink is _DEFAULT else sink
        if environment is _DEFAULT:
            environment = PsutilEnvironment() if cfg["environment_report"] else None
        self._environment: Optional[EnvironmentProvider] = environment
        self._compressor: Compressor = compressor or ZipUtilityCompressor(cfg["zip_utility"])

        self._rotation = RotationManager(limit=cfg["rotate_limit_bytes"], sink=self._sink)
        self._writer = WriteSerializer(
            self.log_file,
            sink=self._sink,
            rotation=self._rotation,
            durable=cfg["durable_writes"],
            maxsize=cfg["queue_maxsize"],
        )
        self._archive = ArchiveBuilder(
            self._compressor,
            environment=self._environment,
            excerpt_limit=cfg["excerpt_chars"],
            sink=self._sink,
        )

    # ========================
    # Interface pública de logging
    # ========================

    def log(self, severity: Severity, text: str) -> None:
        self._writer.emit(severity, text)

    def trace(self, text: str) -> None:
        self.log(Severity.TRACE, text)

    def info(self, text: str) -> None:
        self.log(Severity.INFO, text)

    def notice(self, text: str) -> None:
        self.log(Severity.NOTICE, text)

    def warning(self, text: str) -> None:
        self.log(Severity.WARNING, text)

    def error(self, text: str) -> None:
        self.log(Severity.ERROR, text)

    def critical(self, text: str) -> None:
        self.log(Severity.CRITICAL, text)

    # ========================
    # Propriedades
    # ========================

    @property
    def app_name(self) -> str:
        return self._app_name

    @property
    def settings(self) -> dict:
        return dict(self._settings)

    @property
    def log_directory(self) -> Path:
        """Diretório onde ficam o log ativo, os backups e o relatório."""
        return self._settings["log_dir"] or directory_for(self._app_name)

    @property
    def log_file(self) -> Path:
        return log_file_for(self.log_directory, self._app_name)

    # ========================
    # Relatório e ciclo de vida
    # ========================

    def make_archive(self) -> Optional[Path]:
        """Gera o relatório compactado e retorna seu caminho, ou None.

        Antes de copiar o log, espera a fila de escrita drenar (limitado por
        ``archive_flush_timeout``) para que as linhas já submetidas entrem no
        relatório.
        """
        if not self._writer.flush(self._settings["archive_flush_timeout"]):
            logger.warning("make_archive: fila de escrita não drenou a tempo; seguindo com o snapshot atual")
        return self._archive.build(self._writer.active_path)

    def flush(self, timeout: Optional[float] = None) -> bool:
        return self._writer.flush(timeout)

    def close(self, timeout: Optional[float] = None) -> None:
        self._writer.close(timeout)

    def __enter__(self) -> "InsightCenter":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
