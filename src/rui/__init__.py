# SPDX-FileCopyrightText: 2024 Rui Developers
# SPDX-License-Identifier: Apache-2.0

"""Initialization and entry-point for console application."""


# type annotations
from __future__ import annotations
from typing import List

# standard libs
import os
import sys

# external libs
from cmdkit.app import Application, ApplicationGroup, exit_status
from cmdkit.cli import Interface
from cmdkit.config import Namespace, Configuration, ConfigurationError

# internal libs
from rui.core.ansi import colorize_usage
from rui.core.config import Settings, default, load
from rui.core.exceptions import display_critical
from rui.core.logging import Logger, initialize_logging
from rui.home import HomeApp, HomeSwitchApp
from rui.system import SystemApp, SystemSwitchApp
from rui.edit import EditApp
from rui.config import ConfigApp

# public interface
__all__ = ['RuiApp', 'main', '__version__']

# project metadata
__version__     = '1.4.0'
__authors__     = 'Rui Developers'
__contact__     = 'rui@users.noreply.github.com'
__license__     = 'Apache Software License'
__keywords__    = 'nix nixos home-manager nh flake command-line'
__website__     = 'https://github.com/rui-nix/rui'
__description__ = 'Personal NixOS flake manager.'

# initialize logger
log = Logger.with_name('rui')


# inject logger setup into command-line framework
Application.log_critical = log.critical
Application.log_exception = log.exception


ALLOW_UNFREE_VAR = 'NIXPKGS_ALLOW_UNFREE'


APP_NAME = 'rui'
APP_USAGE = f"""\
Usage:
{APP_NAME} [-h] [-v] [--allow-unfree] <command> [<args>...]

{__description__}\
"""

APP_HELP = f"""\
{APP_USAGE}

Commands:
  home                   {HomeApp.__doc__}
  os                     {SystemApp.__doc__}
  edit                   {EditApp.__doc__}
  config                 {ConfigApp.__doc__}

Options:
      --allow-unfree     Allow unfree packages (sets {ALLOW_UNFREE_VAR}=1).
  -h, --help             Show this message and exit.
  -v, --version          Show the version and exit.

Environment:
  FLAKE                  Flake reference (overrides `flake` in config).
  FLAKE_EDITOR           Editor for `rui edit` if none in config (then EDITOR).
  RUI_CONFIG             Path to configuration file.

Issue tracking at:
{__website__}\
"""


class RuiApp(ApplicationGroup):
    """Top-level application class for console application."""

    interface = Interface(APP_NAME, APP_USAGE, APP_HELP, formatter=colorize_usage)

    interface.add_argument('-v', '--version', action='version', version=__version__)
    interface.add_argument('command')

    # NOTE: global options are only accepted ahead of the command
    allow_unfree: bool = False

    command = None
    commands = {
        'home': HomeApp,
        'os': SystemApp,
        'edit': EditApp,
        'config': ConfigApp,
        # hidden aliases
        'hs': HomeSwitchApp,
        'osw': SystemSwitchApp,
    }

    @classmethod
    def from_cmdline(cls, cmdline: List[str] = None) -> RuiApp:
        """Strip leading global options before delegating to the member application."""
        cmdline = list(cmdline or [])
        allow_unfree = False
        while cmdline and cmdline[0] == '--allow-unfree':
            allow_unfree = True
            cmdline.pop(0)
        self = super().from_cmdline(cmdline)
        self.allow_unfree = allow_unfree
        return self

    def run(self: RuiApp) -> None:
        """Export global options and delegate to member application."""
        if self.allow_unfree:
            os.environ[ALLOW_UNFREE_VAR] = '1'
            log.debug(f'Set {ALLOW_UNFREE_VAR}=1')
        super().run()


def main() -> int:
    """Entry-point for console application."""
    try:
        initialize_logging(Configuration(default=default()))  # NOTE: warnings while loading
        config = load()
        initialize_logging(config)
        settings = Settings.from_config(config)
    except ConfigurationError as error:
        display_critical(error, module=__name__)
        return exit_status.bad_config
    return RuiApp.main(sys.argv[1:], shared=Namespace(settings=settings))
