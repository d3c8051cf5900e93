# SPDX-FileCopyrightText: 2024 Rui Developers
# SPDX-License-Identifier: Apache-2.0

"""Manage the operating system."""


# type annotations
from __future__ import annotations
from typing import Dict, Final

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
__all__ = ['SystemApp', 'SystemSwitchApp', 'SystemBootApp', 'SystemTestApp',
           'SystemBuildApp', 'SystemDryActivateApp', 'SystemBuildVMApp', ]


ACTION_DESCRIPTION: Final[Dict[Action, str]] = {
    Action.SWITCH: 'Build and activate the system configuration.',
    Action.BOOT: 'Build and make the system configuration the boot default.',
    Action.TEST: 'Build and activate without adding a boot entry.',
    Action.BUILD: 'Build the system configuration.',
    Action.DRY_ACTIVATE: 'Show what activation would change.',
    Action.BUILD_VM: 'Build a virtual machine from the system configuration.',
}


def build_interface(action: Action) -> Interface:
    """Shared command-line interface for system actions."""

    program = f'rui os {action.label}'
    usage = f"""\
Usage:
  {program} [-h] [--force-nixos-rebuild] [--hostname HOST] [--flake REF]
  {ACTION_DESCRIPTION[action]}\
"""

    help_text = f"""\
{usage}

  Uses `nh` if available, otherwise `nixos-rebuild` (through `doas` or `sudo`).

Options:
      --force-nixos-rebuild   Use `nixos-rebuild` even if `nh` is available.
      --hostname     HOST     Target host (default: this machine's hostname).
      --flake        REF      Flake reference (default: $FLAKE or `flake` in config).
  -h, --help                  Show this message and exit.\
"""

    interface = Interface(program, usage, help_text, formatter=colorize_usage)
    interface.add_argument('--force-nixos-rebuild', '--use-nixos-rebuild', action='store_true',
                           dest='force_native')
    interface.add_argument('--hostname', default=None)
    interface.add_argument('--flake', default=None)
    return interface


class SystemActionApp(Application):
    """Run a system action through the router."""

    ALLOW_NOARGS = True
    action: Action = None

    force_native: bool = False
    hostname: str = None
    flake: str = None

    exceptions = {
        **get_shared_exception_mapping(__name__)
    }

    def run(self: SystemActionApp) -> None:
        """Delegate to `nh` or `nixos-rebuild`."""
        router = Router(Settings.from_shared(self.shared))
        router.execute(InvocationRequest(domain=Domain.OS,
                                         action=self.action,
                                         force_native=self.force_native,
                                         target=self.hostname,
                                         flake=self.flake))


class SystemSwitchApp(SystemActionApp):
    """Build and activate the system configuration."""
    action = Action.SWITCH
    interface = build_interface(action)


class SystemBootApp(SystemActionApp):
    """Build and make the system configuration the boot default."""
    action = Action.BOOT
    interface = build_interface(action)


class SystemTestApp(SystemActionApp):
    """Build and activate without adding a boot entry."""
    action = Action.TEST
    interface = build_interface(action)


class SystemBuildApp(SystemActionApp):
    """Build the system configuration."""
    action = Action.BUILD
    interface = build_interface(action)


class SystemDryActivateApp(SystemActionApp):
    """Show what activation would change."""
    action = Action.DRY_ACTIVATE
    interface = build_interface(action)


class SystemBuildVMApp(SystemActionApp):
    """Build a virtual machine from the system configuration."""
    action = Action.BUILD_VM
    interface = build_interface(action)


PROGRAM = 'rui os'
USAGE = f"""\
Usage:
  {PROGRAM} [-h] <action> [<args>...]
  {__doc__}\
"""

HELP = f"""\
{USAGE}

Commands:
  switch, sw             {SystemSwitchApp.__doc__}
  boot                   {SystemBootApp.__doc__}
  test                   {SystemTestApp.__doc__}
  build                  {SystemBuildApp.__doc__}
  dry-activate, dry      {SystemDryActivateApp.__doc__}
  build-vm, vm           {SystemBuildVMApp.__doc__}

Options:
  -h, --help             Show this message and exit.\
"""


class SystemApp(ApplicationGroup):
    """Manage the operating system."""

    interface = Interface(PROGRAM, USAGE, HELP, formatter=colorize_usage)
    interface.add_argument('command')

    command = None
    commands = {
        'switch': SystemSwitchApp,
        'sw': SystemSwitchApp,
        'boot': SystemBootApp,
        'test': SystemTestApp,
        'build': SystemBuildApp,
        'dry-activate': SystemDryActivateApp,
        'dry': SystemDryActivateApp,
        'build-vm': SystemBuildVMApp,
        'vm': SystemBuildVMApp,
    }
