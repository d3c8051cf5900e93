# SPDX-FileCopyrightText: 2024 Rui Developers
# SPDX-License-Identifier: Apache-2.0

"""Run external commands in the foreground."""


# type annotations
from __future__ import annotations

# standard libs
import shlex
import subprocess

# internal libs
from rui.core.logging import Logger
from rui.core.exceptions import CommandFailed

# public interface
__all__ = ['run', ]

# initialize logger
log = Logger.with_name(__name__)


def run(executable: str, *args: str) -> None:
    """
    Run `executable` with `args` sharing our standard streams and wait for it.

    Raises:
        CommandFailed: The command could not be started or exited non-zero.
    """
    argv = [executable, *args]
    log.debug(f'Running: {shlex.join(argv)}')
    try:
        subprocess.run(argv, check=True)
    except subprocess.CalledProcessError as error:
        log.debug(f'Exited with status {error.returncode}: {executable}')
        raise CommandFailed(f'exit status {error.returncode}', returncode=error.returncode) from error
    except OSError as error:
        raise CommandFailed(str(error)) from error
