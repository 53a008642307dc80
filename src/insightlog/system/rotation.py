"""Rotação por tamanho do arquivo de log ativo.

Executada de forma síncrona pelo worker do ``WriteSerializer``, antes de
cada escrita, de modo que rotação e escrita nunca se intercalam.
"""

import logging
from pathlib import Path
from typing import Callable, Optional

from .log_helpers import atomic_rename, rotation_stamp
from .severity import Severity
from .sink import StructuredSink, report

logger = logging.getLogger(__name__)

DEFAULT_ROTATE_LIMIT = 4_000_000


class RotationManager:
    """Decide quando rotacionar e move o arquivo ativo para um backup.

    O backup fica no mesmo diretório com o nome
    ``<stem>_<YYYY-MM-DD_HH-MM-SS>.log``. Um backup com o mesmo nome é
    removido antes (a última rotação naquele segundo prevalece).
    """

    def __init__(
        self,
        limit: int = DEFAULT_ROTATE_LIMIT,
        sink: Optional[StructuredSink] = None,
        stamp: Callable[[], str] = rotation_stamp,
    ) -> None:
        self.limit = int(limit)
        self.sink = sink
        self._stamp = stamp

    def backup_path_for(self, path: Path) -> Path:
        return path.with_name(f"{path.stem}_{self._stamp()}{path.suffix}")

    def should_rotate(self, path: Optional[Path]) -> bool:
        """True quando o arquivo existe e seu tamanho excede o limite."""
        if path is None:
            return False
        try:
            if not path.exists():
                return False
            return path.stat().st_size > self.limit
        except OSError as exc:
            report(self.sink, Severity.ERROR, f"RotationManager.should_rotate() failed: {exc}")
            return False

    def rotate(self, path: Path) -> Optional[Path]:
        """Renomeia o arquivo ativo para o backup. Retorna o backup ou None.

        Falhas de I/O são reportadas pelo sink e nunca propagadas.
        """
        backup = self.backup_path_for(path)
        try:
            if backup.exists():
                backup.unlink()
            atomic_rename(path, backup)
        except OSError as exc:
            report(self.sink, Severity.ERROR, f"RotationManager.rotate() failed: {exc}")
            return None
        logger.info("rotate: %s -> %s", path, backup)
        return backup
