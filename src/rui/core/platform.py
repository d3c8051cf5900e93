# SPDX-FileCopyrightText: 2024 Rui Developers
# SPDX-License-Identifier: Apache-2.0

"""Platform specific file paths and session detection."""


# type annotations
from __future__ import annotations
from typing import Final, Tuple

# standard libs
import os

# public interface
__all__ = ['home', 'config_home', 'default_config_path', 'config_path',
           'CONFIG_PATH_VAR', 'DISPLAY_VARS', 'has_graphical_session']


home = os.path.expanduser('~')


# NOTE: explicit override for the configuration file location
CONFIG_PATH_VAR: Final[str] = 'RUI_CONFIG'


# One variable per display protocol (X11, Wayland)
DISPLAY_VARS: Final[Tuple[str, ...]] = ('DISPLAY', 'WAYLAND_DISPLAY')


def config_home() -> str:
    """Per-user configuration directory (XDG base directory, `~/.config` if unset)."""
    return os.getenv('XDG_CONFIG_HOME') or os.path.join(home, '.config')


def default_config_path() -> str:
    """Location of the configuration file absent any override."""
    return os.path.join(config_home(), 'rui', 'config.json')


def config_path() -> str:
    """Resolve configuration file path (`RUI_CONFIG` takes precedence)."""
    return os.getenv(CONFIG_PATH_VAR) or default_config_path()


def has_graphical_session() -> bool:
    """True if any display server indicator is set and non-empty."""
    return any(os.getenv(name) for name in DISPLAY_VARS)
