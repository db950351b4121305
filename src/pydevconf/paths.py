from __future__ import annotations

import os
from pathlib import Path

from platformdirs import user_config_dir as _uc

DEFAULT_APP_NAME = "pydevconf"
DEFAULT_FILENAME = "devices.conf"


def _app_name(default: str) -> str:
    return os.getenv("PYDEVCONF_APP_NAME", default)


def user_config_dir(app_name: str = DEFAULT_APP_NAME) -> Path:
    app = _app_name(app_name)
    return Path(_uc(appname=app)).resolve()


def default_store_path(app_name: str = DEFAULT_APP_NAME, filename: str = DEFAULT_FILENAME) -> Path:
    """Return the store file used when no explicit path is given.

    ``PYDEVCONF_PATH`` overrides the location entirely; otherwise the file
    lives in the platform's user config directory for *app_name*.
    """
    env = os.getenv("PYDEVCONF_PATH")
    if env:
        return Path(env).expanduser().resolve()
    return user_config_dir(app_name) / filename
