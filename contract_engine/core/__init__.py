"""Core configuration and factory components."""

from contract_engine.core.config import Settings, get_settings
from contract_engine.core.factory import ComponentFactory, get_factory

__all__ = [
    "Settings",
    "get_settings",
    "ComponentFactory",
    "get_factory",
]
