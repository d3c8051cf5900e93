# SPDX-FileCopyrightText: 2024 Rui Developers
# SPDX-License-Identifier: Apache-2.0

"""Core exception types and handlers shared by all applications."""


# type annotations
from __future__ import annotations
from typing import Union, Optional, Dict, Type, Callable

# standard libs
import sys
import logging
import functools

# external libs
from cmdkit.app import exit_status
from cmdkit.config import ConfigurationError

# internal libs
from rui.core.ansi import faint, bold, magenta

# public interface
__all__ = ['RuiError', 'CommandFailed', 'ActionFailed', 'UnsupportedAction', 'EditorNotFound',
           'display_critical', 'print_and_exit', 'handle_exception', 'handle_action_failed',
           'get_shared_exception_mapping', ]


class RuiError(Exception):
    """Base class for all user-facing errors."""


class CommandFailed(RuiError):
    """An external command could not be spawned or exited non-zero."""

    returncode: Optional[int]

    def __init__(self, message: str, returncode: int = None) -> None:
        super().__init__(message)
        self.returncode = returncode


class ActionFailed(RuiError):
    """The backing tool for a requested action failed."""

    returncode: Optional[int]

    def __init__(self, message: str, returncode: int = None) -> None:
        super().__init__(message)
        self.returncode = returncode


class UnsupportedAction(RuiError):
    """The requested action is not available through the fast-path tool."""


class EditorNotFound(RuiError):
    """No editor could be resolved for `rui edit`."""


def display_critical(error: Union[Exception, str], module: str = None) -> None:
    """Apply basic formatting to exceptions (i.e., without logging)."""
    text = error if isinstance(error, str) else f'{error.__class__.__name__}: {error}'
    name = '' if not module else faint(f'[{module}]')
    print(f'{bold(magenta("CRITICAL"))} {name} {text}', file=sys.stderr)


def print_and_exit(exc: Exception, logger: logging.Logger, status: int) -> int:
    """Print the exception message on <stdout> and exit with `status`."""
    logger.debug(f'{exc.__class__.__name__}: ' + str(exc).replace('\n', ' - '))
    print(exc, file=sys.stdout, flush=True)
    return status


def handle_action_failed(exc: ActionFailed, logger: logging.Logger) -> int:
    """Relay the exit status of the wrapped tool where there is one."""
    status = exc.returncode if exc.returncode else exit_status.runtime_error
    return print_and_exit(exc, logger=logger, status=status)


def handle_exception(exc: Exception, logger: logging.Logger, status: int) -> int:
    """Log the exception argument and exit with `status`."""
    logger.critical(f'{exc.__class__.__name__}: ' + str(exc).replace('\n', ' - '))
    return status


def get_shared_exception_mapping(name: str) -> Dict[Type[Exception], Callable[[Exception], int]]:
    """Generic mapping of exceptions for applications (ordered most specific first)."""
    log = logging.getLogger(name)
    return {
        ActionFailed: functools.partial(handle_action_failed, logger=log),
        RuiError: functools.partial(print_and_exit, logger=log, status=exit_status.runtime_error),
        ConfigurationError: functools.partial(handle_exception, logger=log, status=exit_status.bad_config),
        OSError: functools.partial(print_and_exit, logger=log, status=exit_status.runtime_error),
    }
