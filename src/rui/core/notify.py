# SPDX-FileCopyrightText: 2024 Rui Developers
# SPDX-License-Identifier: Apache-2.0

"""Desktop notifications."""


# type annotations
from __future__ import annotations
from typing import Final

# standard libs
import shutil

# internal libs
from rui.core import process
from rui.core.config import Settings
from rui.core.logging import Logger
from rui.core.platform import has_graphical_session

# public interface
__all__ = ['Notifier', 'TITLE', ]

# initialize logger
log = Logger.with_name(__name__)


TITLE: Final[str] = 'Rui'


class Notifier:
    """Send messages through the configured notifier executable."""

    settings: Settings

    def __init__(self: Notifier, settings: Settings) -> None:
        self.settings = settings

    def notify(self: Notifier, message: str) -> None:
        """
        Send `message` if possible, otherwise do nothing.

        Raises:
            CommandFailed: The notifier was invoked and failed.
        """
        if not has_graphical_session():
            log.trace(f'No graphical session, not sending: {message}')
            return
        executable = shutil.which(self.settings.notifier)
        if executable is None:
            log.debug(f'Notifier not found ({self.settings.notifier})')
            return
        if not self.settings.notify:
            log.trace(f'Notifications disabled, not sending: {message}')
            return
        process.run(executable, TITLE, message)
