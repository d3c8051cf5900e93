# SPDX-FileCopyrightText: 2024 Rui Developers
# SPDX-License-Identifier: Apache-2.0

"""Runtime configuration for Rui."""


# type annotations
from __future__ import annotations
from typing import Optional, Dict, Any, Final, Tuple

# standard libs
import os
import logging
from dataclasses import dataclass

# external libs
from cmdkit.config import Namespace, Configuration, Environ, ConfigurationError

# internal libs
from rui.core.platform import config_path, CONFIG_PATH_VAR

# public interface
__all__ = ['Settings', 'ConfigurationError', 'Namespace', 'Configuration',
           'default', 'default_editor', 'load', 'load_file', 'load_env', 'blame',
           'ENV_ALIASES', 'EDITOR_VARS', 'FIELD_TYPES', 'LOGGING_FIELD_TYPES', 'LEVEL_NAMES',
           'DEFAULT_NOTIFIER', 'DEFAULT_LOGGING_FORMAT', ]

# partial logging (not yet configured - initialized afterward)
log = logging.getLogger(__name__)


DEFAULT_NOTIFIER: Final[str] = 'notify-send'
DEFAULT_LOGGING_FORMAT: Final[str] = (
    '%(ansi_bold)s%(ansi_level)s%(levelname)8s%(ansi_reset)s '
    '%(ansi_faint)s[%(name)s]%(ansi_reset)s %(message)s'
)


# Environment variables (not prefixed) mapped onto configuration fields
ENV_ALIASES: Final[Dict[str, str]] = {
    'FLAKE': 'flake',
}


# Editor used when the configuration file names none (first set wins)
EDITOR_VARS: Final[Tuple[str, ...]] = ('FLAKE_EDITOR', 'EDITOR')


# Expected types of known fields (anything else is dropped with a warning)
FIELD_TYPES: Final[Dict[str, type]] = {
    'notify': bool,
    'editor': str,
    'flake': str,
    'notifier': str,
}
LOGGING_FIELD_TYPES: Final[Dict[str, type]] = {
    'level': str,
    'format': str,
    'datefmt': str,
}
LEVEL_NAMES: Final[Tuple[str, ...]] = ('TRACE', 'DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL')


def default_editor() -> Optional[str]:
    """First editor named by `EDITOR_VARS`."""
    for name in EDITOR_VARS:
        if os.getenv(name):
            return os.getenv(name)
    return None


def default() -> Namespace:
    """Hard-coded defaults (lowest precedence)."""
    return Namespace({
        'notify': False,
        'notifier': DEFAULT_NOTIFIER,
        'editor': default_editor(),
        'flake': None,
        'logging': {
            'level': 'warning',
            'format': DEFAULT_LOGGING_FORMAT,
            'datefmt': '%Y-%m-%d %H:%M:%S',
        },
    })


def _drop_empty(ns: Dict[str, Any]) -> Namespace:
    """Remove unset values (empty strings and nulls) so they never mask a lower layer."""
    result = Namespace()
    for key, value in ns.items():
        if isinstance(value, dict):
            section = _drop_empty(value)
            if section:
                result[key] = section
        elif value is not None and value != '':
            result[key] = value
    return result


def _drop_invalid(ns: Dict[str, Any], source: str) -> Namespace:
    """Remove known fields with unusable values; unknown fields pass through."""
    result = Namespace()
    for key, value in ns.items():
        if key == 'logging':
            if not isinstance(value, dict):
                log.warning(f'Ignoring `logging` from {source}: expected section, given {value!r}')
                continue
            section = Namespace()
            for name, item in value.items():
                expected = LOGGING_FIELD_TYPES.get(name)
                if expected is not None and not isinstance(item, expected):
                    log.warning(f'Ignoring `logging.{name}` from {source}: '
                                f'expected {expected.__name__}, given {item!r}')
                elif name == 'level' and item.upper() not in LEVEL_NAMES:
                    log.warning(f'Ignoring `logging.level` from {source}: unsupported level {item!r}')
                else:
                    section[name] = item
            if section:
                result[key] = section
        elif key in FIELD_TYPES and not isinstance(value, FIELD_TYPES[key]):
            log.warning(f'Ignoring `{key}` from {source}: '
                        f'expected {FIELD_TYPES[key].__name__}, given {value!r}')
        else:
            result[key] = value
    return result


def load_file(filepath: str) -> Namespace:
    """
    Load JSON configuration file.

    A missing, unreadable, or malformed file is not an error, nor is a field
    with the wrong type. The configuration degrades to defaults and the reason is logged.
    """
    if not os.path.exists(filepath):
        log.debug(f'No configuration file ({filepath})')
        return Namespace()
    try:
        content = Namespace.from_json(filepath)
    except (OSError, ValueError, TypeError) as error:
        log.warning(f'Ignoring configuration file ({filepath}): {error.__class__.__name__}: {error}')
        return Namespace()
    log.debug(f'Loaded configuration file ({filepath})')
    return _drop_invalid(_drop_empty(content), source=filepath)


def load_env() -> Namespace:
    """Load environment variables as a namespace (`RUI_*` wins over aliases)."""
    env = Namespace({field: os.getenv(name) for name, field in ENV_ALIASES.items()})
    prefixed = Environ(prefix='RUI').expand()
    prefixed.pop(CONFIG_PATH_VAR[len('RUI_'):].lower(), None)
    env.update(prefixed)
    return _drop_invalid(_drop_empty(env), source='environment')


def load(filepath: str = None) -> Configuration:
    """Load configuration from file and merge environment variables."""
    return Configuration(**{
        'default': default(),
        'file': load_file(filepath or config_path()),
        'env': load_env(),
    })


def blame(base: Configuration, *varpath: str) -> Optional[str]:
    """Construct filename or variable assignment string based on precedent of `varpath`."""
    try:
        source = base.which(*varpath)
    except KeyError:
        return None
    if source == 'file':
        return f'from: {config_path()}'
    elif source == 'env':
        for name, field in ENV_ALIASES.items():
            if (field, ) == varpath and os.getenv(name) and not os.getenv(f'RUI_{field.upper()}'):
                return f'from: {name}'
        return 'from: RUI_' + '_'.join([node.upper() for node in varpath])
    elif source == 'default' and varpath == ('editor', ):
        for name in EDITOR_VARS:
            if os.getenv(name):
                return f'from: {name}'
    return f'from: <{source}>'


@dataclass(frozen=True)
class Settings:
    """Resolved configuration values used by the router (immutable)."""

    notify: bool = False
    editor: Optional[str] = None
    flake: Optional[str] = None
    notifier: str = DEFAULT_NOTIFIER

    @classmethod
    def from_config(cls, config: Configuration) -> Settings:
        """Build from merged configuration layers."""
        return cls(notify=config.get('notify', False),
                   editor=config.get('editor') or None,
                   flake=config.get('flake') or None,
                   notifier=config.get('notifier') or DEFAULT_NOTIFIER)

    @classmethod
    def load(cls, filepath: str = None) -> Settings:
        """Shorthand for `Settings.from_config(load(filepath))`."""
        return cls.from_config(load(filepath))

    @classmethod
    def from_shared(cls, shared: Optional[Dict[str, Any]]) -> Settings:
        """Settings handed down by the top-level application, else load them now."""
        if shared and isinstance(shared.get('settings'), Settings):
            return shared['settings']
        return cls.load()
