"""Compressão do pacote de diagnóstico em um arquivo ZIP plano.

``ZipUtilityCompressor`` invoca o utilitário externo ``zip -j``;
``ZipFileCompressor`` produz o mesmo layout plano com ``zipfile`` para
hosts sem o utilitário.
"""

import logging
import os
import subprocess
import zipfile
from pathlib import Path
from typing import Protocol, Sequence

from .errors import CompressionError, ExecutionFailedError, UtilityNotFoundError

logger = logging.getLogger(__name__)

DEFAULT_ZIP_UTILITY = "/usr/bin/zip"


class Compressor(Protocol):
    def compress(self, files: Sequence[Path], destination: Path) -> None: ...


class ZipUtilityCompressor:
    """Chama o executável ``zip`` com ``-j`` (sem hierarquia de diretórios)."""

    def __init__(self, utility: str = DEFAULT_ZIP_UTILITY, timeout: float | None = None) -> None:
        self.utility = utility
        self.timeout = timeout

    def compress(self, files: Sequence[Path], destination: Path) -> None:
        """Compacta ``files`` em ``destination``.

        Lança ``UtilityNotFoundError`` se o utilitário não existir ou não for
        executável e ``ExecutionFailedError`` para código de saída != 0.
        """
        if not (os.path.isfile(self.utility) and os.access(self.utility, os.X_OK)):
            raise UtilityNotFoundError(self.utility)
        args = [self.utility, "-q", "-j", str(destination)] + [str(f) for f in files]
        try:
            proc = subprocess.run(args, capture_output=True, timeout=self.timeout, check=False)  # nosec B603
        except FileNotFoundError as exc:
            raise UtilityNotFoundError(self.utility) from exc
        except (OSError, subprocess.SubprocessError) as exc:
            raise CompressionError(f"falha ao executar {self.utility}: {exc}") from exc
        if proc.returncode != 0:
            logger.debug(
                "ZipUtilityCompressor: stderr=%s", proc.stderr.decode("utf-8", errors="replace").strip()
            )
            raise ExecutionFailedError(proc.returncode)


class ZipFileCompressor:
    """Equivalente em processo usando ``zipfile`` (DEFLATE)."""

    def compress(self, files: Sequence[Path], destination: Path) -> None:
        try:
            with zipfile.ZipFile(destination, "w", compression=zipfile.ZIP_DEFLATED) as zf:
                for f in files:
                    zf.write(f, arcname=Path(f).name)
        except (OSError, zipfile.BadZipFile) as exc:
            raise CompressionError(f"falha ao gerar {destination}: {exc}") from exc
