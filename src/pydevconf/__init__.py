"""File-backed key/value store for small device records in an INI-like format."""
from __future__ import annotations

from .errors import ConfigLoadError, ConfigSaveError, DevConfError
from .model import DEFAULT_SECTION, Entry, Section
from .store import ConfigStore

__all__ = [
    "ConfigStore",
    "ConfigLoadError",
    "ConfigSaveError",
    "DevConfError",
    "DEFAULT_SECTION",
    "Entry",
    "Section",
]
__version__ = "0.1.0"
