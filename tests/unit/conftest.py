# This program is free software: you can redistribute it and/or modify it under the
# terms of the Apache License (v2.0) as published by the Apache Software Foundation.
#
# This program is distributed in the hope that it will be useful, but WITHOUT ANY
# WARRANTY; without even the implied warranty of MERCHANTABILITY or FITNESS FOR A
# PARTICULAR PURPOSE. See the Apache License for more details.
#
# You should have received a copy of the Apache License along with this program.
# If not, see <https://www.apache.org/licenses/LICENSE-2.0>.

"""Shared fixtures for unit tests."""


# standard libs
import os

# external libs
import pytest


# Variables that would otherwise leak the developer's own setup into tests
ENV_VARS = ['FLAKE', 'FLAKE_EDITOR', 'EDITOR', 'USER', 'DISPLAY', 'WAYLAND_DISPLAY',
            'XDG_CONFIG_HOME', 'NIXPKGS_ALLOW_UNFREE', ]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch, tmp_path):
    """Isolate each test from the calling environment."""
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    for name in list(os.environ):
        if name.startswith('RUI_'):
            monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv('XDG_CONFIG_HOME', str(tmp_path / 'config'))
    yield
