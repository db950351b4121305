class DevConfError(Exception):
    """Base class for pydevconf errors."""


class ConfigLoadError(DevConfError):
    """Raised when a config file cannot be opened or read."""


class ConfigSaveError(DevConfError):
    """Raised when an atomic save fails at any step."""
