"""Pacote system: serialização de escrita, rotação e empacotamento de logs.

Re-exports dos tipos usados pela fachada em ``insightlog.core``.
"""

from .archive import ArchiveBuilder
from .compression import ZipFileCompressor, ZipUtilityCompressor
from .environment import PsutilEnvironment
from .errors import CompressionError, ExecutionFailedError, InsightError, UtilityNotFoundError
from .rotation import RotationManager
from .severity import Severity, tag
from .sink import LoggingSink
from .writer import LogEntry, WriteSerializer

__all__ = [
    "ArchiveBuilder",
    "CompressionError",
    "ExecutionFailedError",
    "InsightError",
    "LogEntry",
    "LoggingSink",
    "PsutilEnvironment",
    "RotationManager",
    "Severity",
    "UtilityNotFoundError",
    "WriteSerializer",
    "ZipFileCompressor",
    "ZipUtilityCompressor",
    "tag",
]
