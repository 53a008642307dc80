"""Configurações do insightlog.

Centraliza nome da aplicação, diretório de logs, limite de rotação, tamanho
do trecho final do relatório e utilitário de compressão. Carrega valores a
partir de ``DEFAULT_SETTINGS`` e permite overrides via arquivo ``.env`` ou
variáveis de ambiente (prefixo ``INSIGHT_*``).

As funções públicas principais são:

- ``load_settings()`` -> dicionário com os valores efetivos (ainda como texto
  quando vindos do ambiente).
- ``validate_settings()`` -> normaliza tipos e valida limites.
- ``get_settings()`` -> settings validados ou defaults em caso de erro.
"""

import logging
import os
from pathlib import Path

from ..system.archive import DEFAULT_EXCERPT_LIMIT
from ..system.compression import DEFAULT_ZIP_UTILITY
from ..system.locator import DEFAULT_APP_NAME
from ..system.rotation import DEFAULT_ROTATE_LIMIT
from ..system.writer import DEFAULT_QUEUE_MAXSIZE

logger = logging.getLogger(__name__)

# ========================
# Constantes e padrões globais
# ========================

DEFAULT_SETTINGS = {
    "app_name": DEFAULT_APP_NAME,
    "log_dir": None,
    "rotate_limit_bytes": DEFAULT_ROTATE_LIMIT,
    "excerpt_chars": DEFAULT_EXCERPT_LIMIT,
    "zip_utility": DEFAULT_ZIP_UTILITY,
    "durable_writes": True,
    "queue_maxsize": DEFAULT_QUEUE_MAXSIZE,
    "environment_report": True,
    "archive_flush_timeout": 5.0,
}

# variável de ambiente -> chave de settings
ENV_KEYS = {
    "INSIGHT_APP_NAME": "app_name",
    "INSIGHT_LOG_DIR": "log_dir",
    "INSIGHT_ROTATE_LIMIT_BYTES": "rotate_limit_bytes",
    "INSIGHT_EXCERPT_CHARS": "excerpt_chars",
    "INSIGHT_ZIP_UTILITY": "zip_utility",
    "INSIGHT_DURABLE_WRITES": "durable_writes",
    "INSIGHT_QUEUE_MAXSIZE": "queue_maxsize",
    "INSIGHT_ENVIRONMENT_REPORT": "environment_report",
    "INSIGHT_ARCHIVE_FLUSH_TIMEOUT": "archive_flush_timeout",
}

_TRUE_VALUES = ("1", "true", "yes", "on")
_FALSE_VALUES = ("0", "false", "no", "off")


# ========================
# 1. Carregamento das configurações
# ========================


# Função principal do módulo; carrega todas as configurações do ambiente
def load_settings(env_file: Path | str | None = None) -> dict:
    """Carrega configurações combinando DEFAULTS + .env + ambiente.

    As variáveis em ambiente sobrescrevem valores do arquivo `.env`.
    """
    settings = DEFAULT_SETTINGS.copy()
    env_path = Path(env_file or os.getenv("INSIGHT_ENV_FILE", ".env"))
    env_items = _merge_env_items(env_path)
    for env_var, key in ENV_KEYS.items():
        raw = env_items.get(env_var)
        if raw is None or str(raw).strip() == "":
            continue
        settings[key] = str(raw).strip()
    return settings


# ========================
# 2. Funções auxiliares para ambiente e overrides
# ========================


# Auxilia load_settings; criado para centralizar leitura do .env
def _read_env_file(path: Path | str) -> dict:
    """Lê um arquivo `.env` e devolve um dicionário chave->valor.

    Linhas vazias e comentários (começando com '#') são ignorados.
    """
    result: dict[str, str] = {}
    p = Path(path)
    if not p.exists():
        return result
    try:
        with p.open("r", encoding="utf-8") as fh:
            for line in fh:
                line = line.strip()
                if not line or line.startswith("#"):
                    continue
                if "=" not in line:
                    continue
                key, val = line.split("=", 1)
                key = key.strip()
                val = val.strip().strip('"').strip("'")
                result[key] = val
    except OSError as exc:
        logger.debug("Falha ao ler .env em %s: %s", p, exc)
        return {}
    return result


# Auxilia load_settings; criado para unir variáveis do ambiente e .env
def _merge_env_items(env_path: Path) -> dict:
    """Retorna um mapeamento combinado de `.env` e env vars do processo.

    As variáveis do processo sobrescrevem o arquivo `.env`.
    """
    env_items = _read_env_file(env_path)
    if env_items == {} and env_path.is_file():
        logger.warning("Erro ou ficheiro .env vazio em %s", env_path)
    env_items.update(os.environ)
    return env_items


# ========================
# 3. Validação e normalização
# ========================


def _coerce_bool(key: str, value) -> bool:
    if isinstance(value, bool):
        return value
    s = str(value).strip().lower()
    if s in _TRUE_VALUES:
        return True
    if s in _FALSE_VALUES:
        return False
    raise ValueError(f"valor booleano inválido para {key}: {value!r}")


def _coerce_positive_int(key: str, value) -> int:
    try:
        n = int(value)
    except (TypeError, ValueError) as exc:
        raise ValueError(f"{key} deve ser um inteiro: {value!r}") from exc
    if n <= 0:
        raise ValueError(f"{key} deve ser > 0: {n}")
    return n


# Função principal de validação; normaliza e valida configurações
def validate_settings(settings: dict) -> dict:
    """Normaliza e valida o dicionário de configurações.

    Preenche chaves ausentes com os defaults e lança ``ValueError`` para
    valores inválidos.
    """
    if not isinstance(settings, dict):
        raise TypeError("settings deve ser um dict")

    out = DEFAULT_SETTINGS.copy()
    out.update(settings)

    app_name = str(out.get("app_name") or "").strip()
    out["app_name"] = app_name or DEFAULT_APP_NAME
    out["log_dir"] = Path(out["log_dir"]).expanduser() if out.get("log_dir") else None
    out["rotate_limit_bytes"] = _coerce_positive_int("rotate_limit_bytes", out["rotate_limit_bytes"])
    out["excerpt_chars"] = _coerce_positive_int("excerpt_chars", out["excerpt_chars"])
    out["queue_maxsize"] = _coerce_positive_int("queue_maxsize", out["queue_maxsize"])
    out["zip_utility"] = str(out.get("zip_utility") or DEFAULT_ZIP_UTILITY)
    out["durable_writes"] = _coerce_bool("durable_writes", out["durable_writes"])
    out["environment_report"] = _coerce_bool("environment_report", out["environment_report"])
    try:
        timeout = float(out["archive_flush_timeout"])
    except (TypeError, ValueError) as exc:
        raise ValueError(f"archive_flush_timeout deve ser numérico: {out['archive_flush_timeout']!r}") from exc
    if timeout < 0:
        raise ValueError("archive_flush_timeout deve ser >= 0")
    out["archive_flush_timeout"] = timeout

    logger.debug("Configurações validadas e normalizadas")
    return out


# Auxilia a fachada; retorna settings validados ou padrão em caso de erro
def get_settings(overrides: dict | None = None) -> dict:
    """Retorna settings validados (ambiente + overrides explícitos).

    Em caso de erro, retorna os defaults e registra aviso.
    """
    try:
        settings = load_settings()
        if overrides:
            settings.update({k: v for k, v in overrides.items() if v is not None})
        return validate_settings(settings)
    except (TypeError, ValueError, OSError) as exc:
        logger.warning("Falha ao validar settings; serão usados DEFAULT_SETTINGS: %s", exc)
        return validate_settings(DEFAULT_SETTINGS.copy())
