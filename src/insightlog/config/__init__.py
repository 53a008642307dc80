"""Pacote config: carregamento e validação de configurações."""

from .settings import get_settings, load_settings, validate_settings

__all__ = ["get_settings", "load_settings", "validate_settings"]
