# SPDX-FileCopyrightText: 2024 Rui Developers
# SPDX-License-Identifier: Apache-2.0

"""
Resolve requested actions into invocations of exactly one backing tool.

The fast-path tool (`nh`) is preferred whenever it is found on the `PATH` and
the user has not asked for the native tool (`home-manager` or `nixos-rebuild`).
Every request is announced with a notification before anything is run and
another notification reports the outcome.
"""


# type annotations
from __future__ import annotations
from typing import Optional, Tuple, NamedTuple, Final, Dict

# standard libs
import os
import socket
import getpass
import shutil
from dataclasses import dataclass

# internal libs
from rui.core import process
from rui.core.actions import Action, Domain
from rui.core.config import Settings
from rui.core.exceptions import CommandFailed, ActionFailed, UnsupportedAction, EditorNotFound
from rui.core.logging import Logger
from rui.core.notify import Notifier

# public interface
__all__ = ['Router', 'InvocationRequest', 'Invocation',
           'FAST_PATH_TOOL', 'NATIVE_TOOL', 'FORCE_NATIVE_OPTION', 'ESCALATOR', 'FALLBACK_ESCALATOR']

# initialize logger
log = Logger.with_name(__name__)


FAST_PATH_TOOL: Final[str] = 'nh'
NATIVE_TOOL: Final[Dict[Domain, str]] = {
    Domain.HOME: 'home-manager',
    Domain.OS: 'nixos-rebuild',
}

# Shown in the error message when an action needs the native tool
FORCE_NATIVE_OPTION: Final[Dict[Domain, str]] = {
    Domain.HOME: '--force-home-manager',
    Domain.OS: '--force-nixos-rebuild',
}
NATIVE_TOOL_NAME: Final[Dict[Domain, str]] = {
    Domain.HOME: 'Home Manager',
    Domain.OS: 'nixos-rebuild',
}

ESCALATOR: Final[str] = 'doas'
FALLBACK_ESCALATOR: Final[str] = 'sudo'


@dataclass(frozen=True)
class InvocationRequest:
    """A single requested action (built from command-line input)."""

    domain: Domain
    action: Action
    force_native: bool = False
    target: Optional[str] = None  # user (home) or hostname (OS)
    flake: Optional[str] = None
    extra_args: Tuple[str, ...] = ()


class Invocation(NamedTuple):
    """A fully resolved command."""
    executable: str
    args: Tuple[str, ...]


class Router:
    """Map requests onto the fast-path or native tool and run them."""

    settings: Settings
    notifier: Notifier

    def __init__(self: Router, settings: Settings, notifier: Notifier = None) -> None:
        self.settings = settings
        self.notifier = notifier or Notifier(settings)

    def execute(self: Router, request: InvocationRequest) -> None:
        """
        Run the backing tool for `request` with notifications.

        Raises:
            UnsupportedAction: `nh` is in use but cannot perform the action.
            ActionFailed: The backing tool failed (after a best-effort notification).
            CommandFailed: A queued or success notification could not be delivered.
            OSError: The hostname could not be determined.
        """
        fast_path = shutil.which(FAST_PATH_TOOL)
        name = request.action.label
        self.notifier.notify(f'Queued {request.domain.value} {name}')
        invocation = self.plan(request, fast_path=fast_path)
        try:
            process.run(invocation.executable, *invocation.args)
        except CommandFailed as error:
            message = f'Failed to {name} {request.domain.value}: {error}'
            self.notify_failure(message)
            raise ActionFailed(message, returncode=error.returncode) from error
        self.notifier.notify(f'{request.domain.title} {request.action.verb}')

    def notify_failure(self: Router, message: str) -> None:
        """Deliver failure `message`; problems here only get logged."""
        try:
            self.notifier.notify(message)
        except CommandFailed as error:
            log.warning(f'Failed to send notification: {error}')

    def plan(self: Router, request: InvocationRequest, fast_path: Optional[str]) -> Invocation:
        """Choose the backing tool and build its arguments."""
        if fast_path and not request.force_native:
            if not request.action.fast_path:
                raise UnsupportedAction(f'This command is not supported with {FAST_PATH_TOOL}. '
                                        f'Use {FORCE_NATIVE_OPTION[request.domain]} to use '
                                        f'{NATIVE_TOOL_NAME[request.domain]} instead.')
            if request.domain is Domain.HOME:
                return Invocation(fast_path, ('home', request.action.label, '--', *request.extra_args))
            else:
                return Invocation(fast_path, ('os', request.action.label))
        if request.domain is Domain.HOME:
            return self.plan_home_manager(request)
        else:
            return self.plan_nixos_rebuild(request)

    def plan_home_manager(self: Router, request: InvocationRequest) -> Invocation:
        """Native invocation for the home domain."""
        user = request.target or resolve_user()
        return Invocation(NATIVE_TOOL[Domain.HOME],
                          (request.action.label, '--flake', f'{self.flake(request.flake)}#{user}',
                           *request.extra_args))

    def plan_nixos_rebuild(self: Router, request: InvocationRequest) -> Invocation:
        """Native invocation for the OS domain (needs privilege escalation)."""
        hostname = request.target or socket.gethostname()
        return Invocation(resolve_escalator(),
                          (NATIVE_TOOL[Domain.OS], request.action.label,
                           '--flake', f'{self.flake(request.flake)}#{hostname}'))

    def news(self: Router, user: str = None, flake: str = None, extra_args: Tuple[str, ...] = ()) -> None:
        """Show Home Manager news (always uses `home-manager`)."""
        reference = self.flake(flake)
        if user:
            reference = f'{reference}#{user}'
        process.run(NATIVE_TOOL[Domain.HOME], 'news', '--flake', reference, *extra_args)

    def edit(self: Router, flake: str = None) -> None:
        """Open the flake in the configured editor."""
        if not self.settings.editor:
            raise EditorNotFound('No editor configured (set FLAKE_EDITOR, EDITOR, or `editor` in config)')
        process.run(self.settings.editor, self.flake(flake))

    def flake(self: Router, override: str = None) -> str:
        """Flake reference from command-line `override` or settings."""
        reference = override or self.settings.flake
        if not reference:
            log.warning('No flake reference configured (set FLAKE or `flake` in config)')
            return ''
        return reference


def resolve_user() -> str:
    """User from environment or as reported by the operating system."""
    return os.getenv('USER') or getpass.getuser()


def resolve_escalator() -> str:
    """Prefer `doas` when available, otherwise `sudo`."""
    return shutil.which(ESCALATOR) or FALLBACK_ESCALATOR
