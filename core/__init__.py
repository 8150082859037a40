"""Core building blocks: HTTP boundary adapter, resource contract and stores."""

from .config import AdapterConfig, CorsOptions, Settings, load_settings
from .errors import NamedError

__all__ = ["AdapterConfig", "CorsOptions", "NamedError", "Settings", "load_settings"]
