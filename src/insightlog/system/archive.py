"""Empacotamento do relatório de diagnóstico.

Monta um diretório de staging com o log ativo, um trecho final do log e,
quando disponível, o contexto do host; compacta tudo em
``insight_report.zip`` e remove o staging.
"""

from __future__ import annotations

import logging
import os
import shutil
from pathlib import Path
from typing import Optional

from .compression import Compressor
from .environment import EnvironmentProvider, render_applications
from .errors import CompressionError
from .log_helpers import read_tail, remove_path, remove_path_quietly, write_text_file
from .severity import Severity
from .sink import StructuredSink, report

logger = logging.getLogger(__name__)

ARCHIVE_NAME = "insight_report.zip"
STAGING_NAME = "report_temp"
EXCERPT_NAME = "short_log.txt"
SYSTEM_NAME = "system.txt"
PROCESSES_NAME = "processes.txt"
DEFAULT_EXCERPT_LIMIT = 12000


class ArchiveBuilder:
    """Constrói o artefato de diagnóstico de forma síncrona.

    Qualquer falha é reportada pelo sink e resulta em ``None``; nenhuma
    exceção atravessa ``build``. Um artefato anterior só é substituído
    depois que o novo estiver completo.
    """

    def __init__(
        self,
        compressor: Compressor,
        environment: Optional[EnvironmentProvider] = None,
        excerpt_limit: int = DEFAULT_EXCERPT_LIMIT,
        sink: Optional[StructuredSink] = None,
    ) -> None:
        self.compressor = compressor
        self.environment = environment
        self.excerpt_limit = int(excerpt_limit)
        self.sink = sink

    def build(self, active_path: Optional[Path]) -> Optional[Path]:
        """Gera ``<logDir>/insight_report.zip`` e retorna seu caminho, ou None."""
        if active_path is None or not Path(active_path).is_file():
            logger.debug("ArchiveBuilder.build: nenhum arquivo ativo")
            return None
        active_path = Path(active_path)
        log_dir = active_path.parent
        staging = log_dir / STAGING_NAME
        artifact = log_dir / ARCHIVE_NAME
        partial = log_dir / (ARCHIVE_NAME + ".tmp")

        try:
            remove_path(staging)
            remove_path(partial)
            staging.mkdir(parents=True)

            shutil.copyfile(active_path, staging / active_path.name)
            self._write_excerpt(active_path, staging)
            self._write_environment(staging)

            files = sorted(p for p in staging.iterdir() if p.is_file())
            self.compressor.compress(files, partial)
            os.replace(partial, artifact)
        except (CompressionError, OSError) as exc:
            report(self.sink, Severity.ERROR, f"ArchiveBuilder.build() failed: {exc}")
            return None
        except Exception as exc:
            logger.error("ArchiveBuilder.build: erro inesperado: %s", exc, exc_info=True)
            report(self.sink, Severity.ERROR, f"ArchiveBuilder.build() failed: {exc}")
            return None
        finally:
            remove_path_quietly(staging)
            remove_path_quietly(partial)

        logger.info("ArchiveBuilder.build: artefato gerado em %s", artifact)
        return artifact

    def _write_excerpt(self, active_path: Path, staging: Path) -> None:
        """Grava o trecho final do log no staging. Best-effort."""
        excerpt = active_path.parent / EXCERPT_NAME
        try:
            write_text_file(excerpt, read_tail(active_path, self.excerpt_limit))
            shutil.copyfile(excerpt, staging / EXCERPT_NAME)
        except OSError as exc:
            logger.debug("ArchiveBuilder: trecho final indisponível: %s", exc, exc_info=True)
        finally:
            remove_path_quietly(excerpt)

    def _write_environment(self, staging: Path) -> None:
        """Grava system.txt e processes.txt quando o provedor estiver disponível."""
        env = self.environment
        if env is None:
            return
        try:
            if not env.available():
                return
            write_text_file(staging / SYSTEM_NAME, env.snapshot())
            write_text_file(staging / PROCESSES_NAME, render_applications(env.active_applications()))
        except Exception as exc:
            logger.debug("ArchiveBuilder: contexto do host indisponível: %s", exc, exc_info=True)
