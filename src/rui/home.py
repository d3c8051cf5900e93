# SPDX-FileCopyrightText: 2024 Rui Developers
# SPDX-License-Identifier: Apache-2.0

"""Manage the home environment."""


# type annotations
from __future__ import annotations
from typing import List, Dict, Final

# external libs
from cmdkit.app import Application, ApplicationGroup
from cmdkit.cli import Interface

# internal libs
from rui.core.ansi import colorize_usage
from rui.core.actions import Action, Domain
from rui.core.config import Settings
from rui.core.exceptions import get_shared_exception_mapping
from rui.core.router import Router, InvocationRequest

# public interface
__all__ = ['HomeApp', 'HomeSwitchApp', 'HomeBuildApp', 'HomeInstantiateApp',
           'HomeGenerationsApp', 'HomePackagesApp', 'HomeNewsApp', ]


ACTION_DESCRIPTION: Final[Dict[Action, str]] = {
    Action.SWITCH: 'Build and activate the home configuration.',
    Action.BUILD: 'Build the home configuration.',
    Action.INSTANTIATE: 'Instantiate the home configuration.',
    Action.GENERATIONS: 'List home configuration generations.',
    Action.PACKAGES: 'List packages in the home environment.',
}


def build_interface(action: Action) -> Interface:
    """Shared command-line interface for home actions."""

    program = f'rui home {action.label}'
    usage = f"""\
Usage:
  {program} [-h] [--force-home-manager] [--user NAME] [--flake REF] [-- ARGS...]
  {ACTION_DESCRIPTION[action]}\
"""

    help_text = f"""\
{usage}

  Uses `nh` if available, otherwise `home-manager`.

Arguments:
  ARGS...                     Passed through to the backing tool.

Options:
      --force-home-manager    Use `home-manager` even if `nh` is available.
      --user         NAME     Target user (default: $USER).
      --flake        REF      Flake reference (default: $FLAKE or `flake` in config).
  -h, --help                  Show this message and exit.\
"""

    interface = Interface(program, usage, help_text, formatter=colorize_usage)
    interface.add_argument('extra_args', nargs='*')
    interface.add_argument('--force-home-manager', '--use-home-manager', action='store_true',
                           dest='force_native')
    interface.add_argument('--user', default=None)
    interface.add_argument('--flake', default=None)
    return interface


class HomeActionApp(Application):
    """Run a home action through the router."""

    ALLOW_NOARGS = True
    action: Action = None

    extra_args: List[str] = []
    force_native: bool = False
    user: str = None
    flake: str = None

    exceptions = {
        **get_shared_exception_mapping(__name__)
    }

    def run(self: HomeActionApp) -> None:
        """Delegate to `nh` or `home-manager`."""
        router = Router(Settings.from_shared(self.shared))
        router.execute(InvocationRequest(domain=Domain.HOME,
                                         action=self.action,
                                         force_native=self.force_native,
                                         target=self.user,
                                         flake=self.flake,
                                         extra_args=tuple(self.extra_args)))


class HomeSwitchApp(HomeActionApp):
    """Build and activate the home configuration."""
    action = Action.SWITCH
    interface = build_interface(action)


class HomeBuildApp(HomeActionApp):
    """Build the home configuration."""
    action = Action.BUILD
    interface = build_interface(action)


class HomeInstantiateApp(HomeActionApp):
    """Instantiate the home configuration."""
    action = Action.INSTANTIATE
    interface = build_interface(action)


class HomeGenerationsApp(HomeActionApp):
    """List home configuration generations."""
    action = Action.GENERATIONS
    interface = build_interface(action)


class HomePackagesApp(HomeActionApp):
    """List packages in the home environment."""
    action = Action.PACKAGES
    interface = build_interface(action)


NEWS_PROGRAM = 'rui home news'
NEWS_USAGE = f"""\
Usage:
  {NEWS_PROGRAM} [-h] [--user NAME] [--flake REF] [-- ARGS...]
  Show Home Manager news.\
"""

NEWS_HELP = f"""\
{NEWS_USAGE}

  Always uses `home-manager`.

Arguments:
  ARGS...                     Passed through to `home-manager news`.

Options:
      --user         NAME     Select the flake output for this user.
      --flake        REF      Flake reference (default: $FLAKE or `flake` in config).
  -h, --help                  Show this message and exit.\
"""


class HomeNewsApp(Application):
    """Show Home Manager news."""

    interface = Interface(NEWS_PROGRAM, NEWS_USAGE, NEWS_HELP, formatter=colorize_usage)

    ALLOW_NOARGS = True

    extra_args: List[str] = []
    interface.add_argument('extra_args', nargs='*')

    user: str = None
    interface.add_argument('--user', default=None)

    flake: str = None
    interface.add_argument('--flake', default=None)

    exceptions = {
        **get_shared_exception_mapping(__name__)
    }

    def run(self: HomeNewsApp) -> None:
        """Run `home-manager news`."""
        router = Router(Settings.from_shared(self.shared))
        router.news(user=self.user, flake=self.flake, extra_args=tuple(self.extra_args))


PROGRAM = 'rui home'
USAGE = f"""\
Usage:
  {PROGRAM} [-h] <action> [<args>...]
  {__doc__}\
"""

HELP = f"""\
{USAGE}

Commands:
  switch, sw             {HomeSwitchApp.__doc__}
  build                  {HomeBuildApp.__doc__}
  instantiate            {HomeInstantiateApp.__doc__}
  generations, gens      {HomeGenerationsApp.__doc__}
  packages, pkgs         {HomePackagesApp.__doc__}
  news                   {HomeNewsApp.__doc__}

Options:
  -h, --help             Show this message and exit.\
"""


class HomeApp(ApplicationGroup):
    """Manage the home environment."""

    interface = Interface(PROGRAM, USAGE, HELP, formatter=colorize_usage)
    interface.add_argument('command')

    command = None
    commands = {
        'switch': HomeSwitchApp,
        'sw': HomeSwitchApp,
        'build': HomeBuildApp,
        'instantiate': HomeInstantiateApp,
        'generations': HomeGenerationsApp,
        'gens': HomeGenerationsApp,
        'packages': HomePackagesApp,
        'pkgs': HomePackagesApp,
        'news': HomeNewsApp,
    }
