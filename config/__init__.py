"""
Módulo de configuração do sistema.
Exporta as configurações principais para uso em todo o projeto.
"""

from config.settings import Settings, get_settings
from config.stores import StoreDescriptor, QueryFormat, STORE_REGISTRY
from config.logging_config import setup_logging

__all__ = [
    "Settings",
    "get_settings",
    "StoreDescriptor",
    "QueryFormat",
    "STORE_REGISTRY",
    "setup_logging",
]
