"""Serializador de escrita do arquivo de log ativo.

Qualquer número de threads chama ``emit``; as linhas são enfileiradas e
aplicadas por uma única thread worker, na ordem de submissão. Só essa thread
abre, rotaciona, anexa e sincroniza o arquivo ativo.
"""

from __future__ import annotations

import logging
import os
import queue
import threading
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import BinaryIO, Callable, Optional

import portalocker

from .log_helpers import append_durable, build_line, ensure_dir_writable, format_timestamp
from .rotation import RotationManager
from .severity import Severity
from .sink import StructuredSink, console_fallback, report

logger = logging.getLogger(__name__)

DEFAULT_QUEUE_MAXSIZE = 10000

_STOP = object()


@dataclass(frozen=True)
class LogEntry:
    """Entrada transitória: criada na chamada, renderizada e descartada."""

    timestamp: datetime
    severity: Severity
    text: str

    def render(self) -> str:
        return build_line(format_timestamp(self.timestamp), self.severity.tag, self.text)


class WriteSerializer:
    """Fila limitada drenada por exatamente uma thread worker.

    - ``emit`` nunca espera por I/O de disco; só bloqueia se a fila estiver
      cheia (backpressure em vez de descarte).
    - ``flush`` funciona como barreira: retorna quando tudo o que foi
      enfileirado antes da chamada já foi aplicado.
    - A worker é iniciada sob demanda e recriada após ``fork``.
    """

    def __init__(
        self,
        path: Path | str,
        sink: Optional[StructuredSink] = None,
        rotation: Optional[RotationManager] = None,
        durable: bool = True,
        maxsize: int = DEFAULT_QUEUE_MAXSIZE,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self._path = Path(path)
        self._sink = sink
        self._rotation = rotation
        self._durable = bool(durable)
        self._clock = clock
        self._queue: "queue.Queue[object]" = queue.Queue(maxsize=max(0, int(maxsize)))
        self._handle: Optional[BinaryIO] = None
        self._active_path: Optional[Path] = None
        self._thread: Optional[threading.Thread] = None
        self._pid = os.getpid()
        self._lock = threading.Lock()
        self._closed = False

    @property
    def path(self) -> Path:
        return self._path

    @property
    def active_path(self) -> Optional[Path]:
        """Caminho do arquivo ativo; None até a primeira preparação do storage."""
        return self._active_path

    @property
    def closed(self) -> bool:
        return self._closed

    # ------------------------
    # Lado produtor
    # ------------------------

    def start(self) -> None:
        """Inicia a worker se ainda não estiver rodando neste processo."""
        current_pid = os.getpid()
        with self._lock:
            if self._pid != current_pid:
                # Processo filho após fork: a thread do pai não existe aqui.
                self._pid = current_pid
                self._thread = None
            if self._thread is not None and self._thread.is_alive():
                return
            self._thread = threading.Thread(target=self._run, name="insightlog-writer", daemon=True)
            self._thread.start()

    def emit(self, severity: Severity, text: str) -> None:
        """Renderiza a linha agora e a enfileira para escrita.

        Retorna assim que a linha entra na fila. Com a fila cheia
        (``maxsize``) o produtor espera por uma vaga em vez de descartar a
        linha; nesse caso a chamada acompanha o ritmo da worker.
        """
        entry = LogEntry(self._clock(), Severity(severity), str(text))
        line = entry.render()
        if self._closed:
            console_fallback(line)
            return
        self.start()
        self._queue.put((entry.severity, line))

    def flush(self, timeout: Optional[float] = None) -> bool:
        """Espera a aplicação de tudo o que já foi enfileirado.

        Retorna False se o ``timeout`` expirar antes.
        """
        thread = self._thread
        if thread is None or not thread.is_alive():
            return True
        barrier = threading.Event()
        self._queue.put(barrier)
        return barrier.wait(timeout)

    def close(self, timeout: Optional[float] = None) -> None:
        """Drena a fila, encerra a worker e fecha o handle."""
        with self._lock:
            if self._closed:
                return
            self._closed = True
            thread = self._thread
        if thread is not None and thread.is_alive():
            self._queue.put(_STOP)
            thread.join(timeout)
        else:
            self._close_handle()

    # ------------------------
    # Lado consumidor (thread worker)
    # ------------------------

    def _run(self) -> None:
        while True:
            item = self._queue.get()
            try:
                if item is _STOP:
                    self._close_handle()
                    return
                if isinstance(item, threading.Event):
                    item.set()
                    continue
                severity, line = item
                self._apply(severity, line)
            except Exception as exc:
                # The worker must survive any single failed operation.
                logger.error("WriteSerializer: operação falhou: %s", exc, exc_info=True)
            finally:
                self._queue.task_done()

    def _apply(self, severity: Severity, line: str) -> None:
        self._ensure_handle()
        self._rotate_if_oversized()
        self._ensure_handle()
        forwarded = self._forward(severity, line)
        written = self._write(line)
        if not (forwarded and written):
            console_fallback(line)

    def _ensure_handle(self) -> None:
        """(Re)abre o handle quando ausente ou quando o arquivo sumiu."""
        if self._handle is not None and self._path.exists():
            return
        self._close_handle()
        self._prepare_storage()

    def _prepare_storage(self) -> None:
        """Cria diretório e arquivo ativo, abre o handle e posiciona no fim."""
        self._active_path = self._path
        try:
            if not ensure_dir_writable(self._path.parent):
                raise OSError(f"diretório sem permissão de escrita: {self._path.parent}")
            if not self._path.exists():
                self._path.touch()
            fh = open(self._path, "r+b")
            fh.seek(0, os.SEEK_END)
            self._handle = fh
        except OSError as exc:
            self._handle = None
            report(self._sink, Severity.ERROR, f"WriteSerializer.prepare_storage() failed: {exc}")

    def _rotate_if_oversized(self) -> None:
        if self._rotation is None or not self._rotation.should_rotate(self._path):
            return
        self._close_handle()
        if self._rotation.rotate(self._path) is not None:
            self._prepare_storage()

    def _forward(self, severity: Severity, line: str) -> bool:
        if self._sink is None:
            return False
        try:
            self._sink.emit(severity, line)
            return True
        except Exception as exc:
            logger.debug("WriteSerializer: sink indisponível: %s", exc, exc_info=True)
            return False

    def _write(self, line: str) -> bool:
        if self._handle is None:
            return False
        try:
            append_durable(self._handle, line.encode("utf-8"), self._durable)
            return True
        except (OSError, portalocker.LockException) as exc:
            logger.debug("WriteSerializer: escrita falhou em %s: %s", self._path, exc, exc_info=True)
            self._close_handle()
            return False

    def _close_handle(self) -> None:
        fh, self._handle = self._handle, None
        if fh is None:
            return
        try:
            fh.close()
        except OSError as exc:
            logger.debug("WriteSerializer: falha ao fechar handle: %s", exc)
