# SPDX-FileCopyrightText: 2024 Rui Developers
# SPDX-License-Identifier: Apache-2.0

"""Logging configuration."""


# type annotations
from __future__ import annotations
from typing import Dict, Any, Type

# standard libraries
import sys
import logging

# external libs
from cmdkit.app import exit_status
from cmdkit.config import Configuration, ConfigurationError

# internal libs
from rui.core.ansi import Ansi, COLOR_STDERR
from rui.core.config import blame, LEVEL_NAMES
from rui.core.exceptions import display_critical

# public interface
__all__ = ['Logger', 'TRACE', 'level_from_name', 'build_handler', 'initialize_logging', ]


# Canonical colors for logging messages
level_color: Dict[str, Ansi] = {
    'NULL': Ansi.NULL,
    'TRACE': Ansi.CYAN,
    'DEBUG': Ansi.BLUE,
    'INFO': Ansi.GREEN,
    'WARNING': Ansi.YELLOW,
    'ERROR': Ansi.RED,
    'CRITICAL': Ansi.MAGENTA
}


TRACE: int = logging.DEBUG - 5
logging.addLevelName(TRACE, 'TRACE')


class Logger(logging.Logger):
    """Extend Logger to implement TRACE level."""

    def trace(self, msg: str, *args, **kwargs):
        """Log 'msg % args' with severity 'TRACE'."""
        if self.isEnabledFor(TRACE):
            self._log(TRACE, msg, args, **kwargs)

    @classmethod
    def with_name(cls: Type[Logger], name: str) -> Logger:
        """Shorthand for `log: Logger = logging.getLogger(name)`."""
        return logging.getLogger(name)


# inject class back into logging library
logging.setLoggerClass(Logger)


class LogRecord(logging.LogRecord):
    """Extends LogRecord to include ANSI colors."""

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self.ansi_level = level_color.get(self.levelname, Ansi.NULL).value if COLOR_STDERR else ''
        self.ansi_reset = Ansi.RESET.value if COLOR_STDERR else ''
        self.ansi_bold = Ansi.BOLD.value if COLOR_STDERR else ''
        self.ansi_faint = Ansi.FAINT.value if COLOR_STDERR else ''


# inject factory back into logging library
logging.setLogRecordFactory(LogRecord)


class StreamHandler(logging.StreamHandler):
    """A StreamHandler that panics on exceptions in the logging configuration."""

    def handleError(self, record: LogRecord) -> None:
        """Pretty-print message and halt."""
        err_type, err_val, tb = sys.exc_info()
        display_critical(err_val, module=__name__)
        sys.exit(exit_status.bad_config)


def level_from_name(name: Any, config: Configuration = None) -> int:
    """Get level value from `name`."""
    label = blame(config, 'logging', 'level') if config is not None else 'logging.level'
    if not isinstance(name, str):
        raise ConfigurationError(f'Expected string for logging level, given \'{name}\' ({label})')
    name = name.upper()
    if name == 'TRACE':
        return TRACE
    elif name in LEVEL_NAMES:
        return getattr(logging, name)
    else:
        raise ConfigurationError(f'Unsupported logging level \'{name}\' ({label})')


def build_handler(config: Configuration) -> StreamHandler:
    """Console handler on <stderr> formatted by `config.logging`."""
    handler = StreamHandler(stream=sys.stderr)
    handler.setFormatter(logging.Formatter(config.logging.format,
                                           datefmt=config.logging.datefmt))
    return handler


# null handler for library use
logger = logging.getLogger('rui')
logger.addHandler(logging.NullHandler())


def initialize_logging(config: Configuration) -> None:
    """Enable logging output to the console at the configured level."""
    logger.setLevel(level_from_name(config.logging.level, config))
    for handler in list(logger.handlers):
        if isinstance(handler, StreamHandler):
            logger.removeHandler(handler)
    logger.addHandler(build_handler(config))
