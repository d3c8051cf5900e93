# SPDX-FileCopyrightText: 2024 Rui Developers
# SPDX-License-Identifier: Apache-2.0

"""Open the flake in an editor."""


# type annotations
from __future__ import annotations

# external libs
from cmdkit.app import Application
from cmdkit.cli import Interface

# internal libs
from rui.core.ansi import colorize_usage
from rui.core.config import Settings
from rui.core.exceptions import get_shared_exception_mapping
from rui.core.router import Router

# public interface
__all__ = ['EditApp', ]


PROGRAM = 'rui edit'
USAGE = f"""\
Usage:
  {PROGRAM} [-h] [--flake REF]
  {__doc__}\
"""

HELP = f"""\
{USAGE}

  The editor is taken from `editor` in the configuration file,
  then FLAKE_EDITOR, then EDITOR.

Options:
      --flake        REF      Flake reference (default: $FLAKE or `flake` in config).
  -h, --help                  Show this message and exit.\
"""


class EditApp(Application):
    """Open the flake in an editor."""

    interface = Interface(PROGRAM, USAGE, HELP, formatter=colorize_usage)

    ALLOW_NOARGS = True

    flake: str = None
    interface.add_argument('--flake', default=None)

    exceptions = {
        **get_shared_exception_mapping(__name__)
    }

    def run(self: EditApp) -> None:
        """Launch editor."""
        Router(Settings.from_shared(self.shared)).edit(flake=self.flake)
