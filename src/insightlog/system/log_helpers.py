"""Helpers de baixo nível para o subsistema de logging.

Fornece formatação de timestamps, escrita durável em disco, renomeação
atômica, leitura do trecho final do log e limpeza best-effort.
"""

import logging
import os
import shutil
from datetime import datetime
from pathlib import Path
from typing import BinaryIO

import portalocker

logger = logging.getLogger(__name__)

LINE_TS_FORMAT = "%Y-%m-%d %H:%M:%S.%f"
ROTATION_TS_FORMAT = "%Y-%m-%d_%H-%M-%S"


# -----------------------
# Formatação
# -----------------------
def format_timestamp(dt: datetime | None = None) -> str:
    """Formata o instante com milissegundos + desambiguador sub-milissegundo.

    ``%f`` produz os seis dígitos de microssegundos: os três primeiros são os
    milissegundos e os três últimos o resto em microssegundos.
    """
    return (dt or datetime.now()).strftime(LINE_TS_FORMAT)


def rotation_stamp(dt: datetime | None = None) -> str:
    """Retorna timestamp ordenável usado no nome dos backups."""
    return (dt or datetime.now()).strftime(ROTATION_TS_FORMAT)


def build_line(ts: str, level_tag: str, text: str) -> str:
    """Compõe a linha ``<ts> [<TAG>] <text>\\n``."""
    return f"{ts} [{level_tag}] {text}\n"


# -----------------------
# Escrita segura
# -----------------------
def append_durable(fh: BinaryIO, data: bytes, durable: bool = True) -> None:
    """Posiciona no fim do arquivo, anexa ``data`` e força a gravação em disco.

    O handle não é aberto em modo append: a posição é ajustada explicitamente
    com ``seek`` enquanto o lock exclusivo estiver ativo. Exceções de I/O são
    propagadas para quem chama.
    """
    portalocker.lock(fh, portalocker.LOCK_EX)
    try:
        fh.seek(0, os.SEEK_END)
        fh.write(data)
        fh.flush()
        if durable:
            os.fsync(fh.fileno())
    finally:
        try:
            portalocker.unlock(fh)
        except Exception as exc:
            logger.debug("append_durable: portalocker.unlock falhou: %s", exc)


def write_text_file(path: Path, text: str) -> None:
    """Grava ``text`` em ``path`` via arquivo temporário + replace atômico."""
    tmp = path.with_suffix(path.suffix + ".tmp")
    try:
        with tmp.open("w", encoding="utf-8", newline="") as fh:
            fh.write(text)
        os.replace(tmp, path)
    except OSError:
        tmp.unlink(missing_ok=True)
        raise


def read_tail(path: Path, limit: int = 12000) -> str:
    """Lê o texto completo de ``path`` e retorna os últimos ``limit`` caracteres.

    Finais de linha são preservados como estão no arquivo (sem tradução).
    """
    with open(path, encoding="utf-8", errors="replace", newline="") as fh:
        text = fh.read()
    if limit <= 0:
        return ""
    return text[-limit:]


# -----------------------
# Rotação
# -----------------------
def _attempt_rename(s: Path, d: Path) -> bool:
    try:
        s.rename(d)
        return True
    except OSError as exc:
        logger.debug("atomic_rename: rename failed: %s", exc)
        return False


def atomic_rename(src: Path, dst: Path) -> None:
    """Renomeia ``src`` para ``dst`` (nunca copia).

    Tenta ``Path.rename`` e depois ``os.replace``; a exceção da última
    tentativa é propagada.
    """
    if _attempt_rename(src, dst):
        return
    os.replace(src, dst)


# -----------------------
# Diretórios / limpeza
# -----------------------
def ensure_dir_writable(p: Path) -> bool:
    """Garante, em melhor esforço, que `p` existe e é gravável."""
    try:
        p.mkdir(parents=True, exist_ok=True)
        test = p / f".touch-{os.getpid()}"
        try:
            with open(test, "a", encoding="utf-8") as f:
                f.write("ok")
                f.flush()
        except OSError as exc:
            logger.error("ensure_dir_writable: write test failed for %s: %s", p, exc, exc_info=True)
            return False
        finally:
            try:
                if test.exists():
                    test.unlink()
            except OSError:
                # nosec B110 - cleanup must not raise in best-effort path
                pass
        return True
    except OSError as exc:
        logger.error("ensure_dir_writable: failed for %s: %s", p, exc, exc_info=True)
        return False


def remove_path(p: Path) -> None:
    """Remove arquivo ou diretório em ``p`` se existir. Erros são propagados."""
    if p.is_dir() and not p.is_symlink():
        shutil.rmtree(p)
    elif p.exists() or p.is_symlink():
        p.unlink()


def remove_path_quietly(p: Path) -> None:
    """Versão best-effort de ``remove_path``: falhas viram log de debug."""
    try:
        remove_path(p)
    except OSError as exc:
        logger.debug("remove_path_quietly: falha ao remover %s: %s", p, exc, exc_info=True)
