"""TACACS+ Client Configuration Package

This package provides configuration loading for the authorization client:
- INI file loading
- Environment variable overrides
- Schema validation
"""

from .constants import *
from .loader import load_client_config, load_config
from .schema import ClientConfigSchema, ServerAddress

__all__ = [
    "load_config",
    "load_client_config",
    "ClientConfigSchema",
    "ServerAddress",
]
