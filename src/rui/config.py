# SPDX-FileCopyrightText: 2024 Rui Developers
# SPDX-License-Identifier: Apache-2.0

"""Inspect configuration."""


# type annotations
from __future__ import annotations
from typing import Any

# standard libs
import sys
import json

# external libs
from cmdkit.app import Application, ApplicationGroup
from cmdkit.cli import Interface
from cmdkit.config import Configuration, ConfigurationError
from rich.console import Console
from rich.syntax import Syntax

# internal libs
from rui.core.ansi import colorize_usage
from rui.core.config import load, blame
from rui.core.exceptions import get_shared_exception_mapping
from rui.core.platform import config_path

# public interface
__all__ = ['ConfigApp', 'ConfigGetApp', 'ConfigWhichApp', ]


def lookup(config: Configuration, varpath: str) -> Any:
    """Get value at dotted `varpath` (e.g., 'logging.level')."""
    if varpath.startswith('.') or varpath.endswith('.'):
        raise ConfigurationError(f'Malformed variable path "{varpath}"')
    value = config
    for name in varpath.split('.'):
        if not isinstance(value, dict) or name not in value:
            raise ConfigurationError(f'"{varpath}" not found')
        value = value[name]
    return value


GET_PROGRAM = 'rui config get'
GET_SYNOPSIS = f'{GET_PROGRAM} [-h] [SECTION[...].VAR] [-r]'
GET_USAGE = f"""\
Usage:
  {GET_SYNOPSIS}
  Get configuration option.\
"""

GET_HELP = f"""\
{GET_USAGE}

  The output is the merged configuration from all sources.
  Use `rui config which` to see where a specific option originates from.

Arguments:
  SECTION[...].VAR          Path to variable (default: whole configuration).

Options:
  -r, --raw                 Disable formatting.
  -h, --help                Show this message and exit.\
"""


class ConfigGetApp(Application):
    """Get configuration option."""

    interface = Interface(GET_PROGRAM, GET_USAGE, GET_HELP, formatter=colorize_usage)

    ALLOW_NOARGS = True

    varpath: str = None
    interface.add_argument('varpath', nargs='?', default=None)

    raw_mode: bool = False
    interface.add_argument('-r', '--raw', action='store_true', dest='raw_mode')

    exceptions = {
        **get_shared_exception_mapping(__name__)
    }

    def run(self: ConfigGetApp) -> None:
        """Business logic for `config get`."""
        config = load()
        value = config if self.varpath is None else lookup(config, self.varpath)
        self.print_output(value)

    def print_output(self: ConfigGetApp, value: Any) -> None:
        """Format and print final `value`."""
        if isinstance(value, dict):
            text = json.dumps(dict(value), indent=4)
        else:
            text = json.dumps(value)
        if sys.stdout.isatty() and not self.raw_mode:
            Console().print(Syntax(text, 'json', word_wrap=True, background_color='default'))
        else:
            # NOTE: JSON formatting puts quotations - we don't want these on raw output
            print(text.strip('"') if self.raw_mode else text, file=sys.stdout, flush=True)


WHICH_PROGRAM = 'rui config which'
WHICH_SYNOPSIS = f'{WHICH_PROGRAM} [-h] SECTION[...].VAR [--site]'
WHICH_USAGE = f"""\
Usage:
  {WHICH_SYNOPSIS}
  Show origin of configuration option.\
"""

WHICH_HELP = f"""\
{WHICH_USAGE}

Arguments:
  SECTION[...].VAR        Path to variable.

Options:
      --site              Output originating layer name only.
  -h, --help              Show this message and exit.\
"""


class ConfigWhichApp(Application):
    """Show origin of configuration option."""

    interface = Interface(WHICH_PROGRAM, WHICH_USAGE, WHICH_HELP, formatter=colorize_usage)

    varpath: str = None
    interface.add_argument('varpath', metavar='VAR')

    site_only: bool = False
    interface.add_argument('--site', action='store_true', dest='site_only')

    exceptions = {
        **get_shared_exception_mapping(__name__)
    }

    def run(self: ConfigWhichApp) -> None:
        """Business logic for `config which`."""
        config = load()
        value = lookup(config, self.varpath)
        varpath = self.varpath.split('.')
        site = config.which(*varpath)
        if self.site_only:
            print(site)
        else:
            print(f'{json.dumps(value)} ({blame(config, *varpath)})')


PROGRAM = 'rui config'
USAGE = f"""\
Usage:
  {PROGRAM} [-h]
  {GET_SYNOPSIS}
  {WHICH_SYNOPSIS}

  {__doc__}\
"""


def build_help() -> str:
    """Help text with the resolved configuration file path."""
    return f"""\
{USAGE}

Commands:
  get              {ConfigGetApp.__doc__}
  which            {ConfigWhichApp.__doc__}

Options:
  -h, --help       Show this message and exit.

Files:
  {config_path()}\
"""


class ConfigApp(ApplicationGroup):
    """Inspect configuration."""

    interface = Interface(PROGRAM, USAGE, build_help(), formatter=colorize_usage)
    interface.add_argument('command')

    command = None
    commands = {'get': ConfigGetApp,
                'which': ConfigWhichApp, }
