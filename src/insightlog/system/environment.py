"""Coleta de contexto do host para o relatório de diagnóstico.

Snapshot estático de SO, hardware e processo, e lista de aplicações ativas.
Usa ``psutil`` para memória, CPUs e processos; ``platform`` e ``socket``
para identificação do sistema.
"""

import logging
import os
import platform
import socket
from typing import List, Protocol, Tuple

import psutil

logger = logging.getLogger(__name__)

# (nome, identificador, pid)
Application = Tuple[str, str, int]


class EnvironmentProvider(Protocol):
    def available(self) -> bool: ...

    def snapshot(self) -> str: ...

    def active_applications(self) -> List[Application]: ...


class PsutilEnvironment:
    """Provedor padrão baseado em psutil; disponível em qualquer plataforma suportada."""

    def available(self) -> bool:
        return True

    def snapshot(self) -> str:
        """Retorna um resumo em texto do sistema, host e processo atual."""
        try:
            mem_mb = psutil.virtual_memory().total // (1024 * 1024)
        except (OSError, RuntimeError) as exc:
            logger.debug("snapshot: virtual_memory falhou: %s", exc, exc_info=True)
            mem_mb = 0
        cpus = psutil.cpu_count(logical=True) or 0
        try:
            active = len(psutil.Process().cpu_affinity())
        except (AttributeError, OSError, psutil.Error):
            # cpu_affinity is not available on every platform (e.g. macOS)
            active = cpus

        lines = [
            f"OS: {platform.system()} {platform.release()} ({platform.version()})",
            f"Host: {socket.gethostname()}",
            f"Memory: {mem_mb} MB",
            f"CPUs: {cpus}",
            f"Active: {active}",
            f"Arch: {platform.machine()}",
            f"Python: {platform.python_version()}",
            f"PID: {os.getpid()}",
        ]
        return "\n".join(lines) + "\n"

    def active_applications(self) -> List[Application]:
        """Lista processos visíveis como (nome, executável, pid)."""
        apps: List[Application] = []
        for proc in psutil.process_iter(["pid", "name", "exe"]):
            info = proc.info
            name = info.get("name")
            if not name:
                continue
            apps.append((str(name), str(info.get("exe") or ""), int(info.get("pid") or 0)))
        return apps


def render_applications(apps: List[Application]) -> str:
    """Renderiza a lista de aplicações, uma por linha."""
    lines = ["Running Apps:"]
    for name, identifier, pid in apps:
        if identifier:
            lines.append(f"{name} - {identifier} (pid {pid})")
        else:
            lines.append(f"{name} (pid {pid})")
    return "\n".join(lines) + "\n"
