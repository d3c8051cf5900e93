# SPDX-FileCopyrightText: 2024 Rui Developers
# SPDX-License-Identifier: Apache-2.0

"""Catalog of actions and the domains they apply to."""


# type annotations
from __future__ import annotations
from typing import NamedTuple

# standard libs
from enum import Enum

# public interface
__all__ = ['Action', 'ActionDescriptor', 'Domain', 'describe', ]


class ActionDescriptor(NamedTuple):
    """Static description of an action."""
    name: str
    verb: str
    fast_path: bool


class Action(Enum):
    """Closed set of actions understood by the router."""

    SWITCH = ActionDescriptor('switch', 'switched', True)
    BOOT = ActionDescriptor('boot', 'booted', False)
    TEST = ActionDescriptor('test', 'tested', False)
    BUILD = ActionDescriptor('build', 'built', True)
    DRY_ACTIVATE = ActionDescriptor('dry-activate', 'dry activated', False)
    BUILD_VM = ActionDescriptor('build-vm', 'VM built', False)
    INSTANTIATE = ActionDescriptor('instantiate', 'instantiated', False)
    GENERATIONS = ActionDescriptor('generations', 'generations listed', False)
    PACKAGES = ActionDescriptor('packages', 'packages shown', False)

    @property
    def label(self: Action) -> str:
        """Canonical name passed to the backing tool (e.g., 'dry-activate')."""
        return self.value.name

    @property
    def verb(self: Action) -> str:
        """Past tense used in notifications (e.g., 'switched')."""
        return self.value.verb

    @property
    def fast_path(self: Action) -> bool:
        """True if `nh` supports this action."""
        return self.value.fast_path

    @classmethod
    def from_name(cls, name: str) -> Action:
        """Look up action by its canonical name."""
        for action in cls:
            if action.label == name:
                return action
        raise ValueError(f'Unknown action \'{name}\'')


def describe(action: Action) -> ActionDescriptor:
    """Name, past-tense verb, and fast-path eligibility of `action`."""
    return action.value


class Domain(Enum):
    """What an action applies to: the home environment or the whole system."""

    HOME = 'home'
    OS = 'OS'

    @property
    def title(self: Domain) -> str:
        """Capitalized form used at the start of a message."""
        return self.value[0].upper() + self.value[1:]
