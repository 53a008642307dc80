"""Localização do diretório e do arquivo de log por aplicação.

Funções puras: nenhuma delas cria diretórios ou toca no disco. A criação
do diretório fica a cargo de quem chama (ver ``log_helpers.ensure_dir_writable``).
"""

import re
import sys
import tempfile
from pathlib import Path

DEFAULT_APP_NAME = "InsightKit"

# Plataforma primária: logs ficam em ~/Library/Logs/<app>
PRIMARY_PLATFORM = "darwin"


def sanitize_app_name(raw_name: str, fallback: str = DEFAULT_APP_NAME) -> str:
    """Sanitiza o nome da aplicação para uso seguro no filesystem.

    Mantém apenas o basename, troca caracteres inseguros por ``_`` e limita
    o comprimento.
    """
    rn = Path(raw_name or fallback).name.lstrip(".")
    name = re.sub(r"[^A-Za-z0-9._-]+", "_", rn)
    if not name:
        name = fallback
    if len(name) > 200:
        name = name[:200]
    return name


def directory_for(app_name: str, platform: str | None = None) -> Path:
    """Retorna o diretório de logs da aplicação para a plataforma.

    Na plataforma primária usa ``~/Library/Logs/<app>``; nas demais, um
    subdiretório por aplicação dentro do diretório temporário do sistema.
    """
    name = sanitize_app_name(app_name)
    plat = platform if platform is not None else sys.platform
    if plat == PRIMARY_PLATFORM:
        return Path.home() / "Library" / "Logs" / name
    return Path(tempfile.gettempdir()) / name


def log_file_for(directory: Path, app_name: str) -> Path:
    """Retorna o caminho do arquivo ativo ``<dir>/<App>.log``."""
    return Path(directory) / f"{sanitize_app_name(app_name)}.log"
