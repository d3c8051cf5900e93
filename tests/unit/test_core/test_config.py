# This program is free software: you can redistribute it and/or modify it under the
# terms of the Apache License (v2.0) as published by the Apache Software Foundation.
#
# This program is distributed in the hope that it will be useful, but WITHOUT ANY
# WARRANTY; without even the implied warranty of MERCHANTABILITY or FITNESS FOR A
# PARTICULAR PURPOSE. See the Apache License for more details.
#
# You should have received a copy of the Apache License along with this program.
# If not, see <https://www.apache.org/licenses/LICENSE-2.0>.

"""Unit tests for configuration layers and settings."""


# standard libs
import os
import json

# internal libs
from rui.core.config import Settings, load, load_env, load_file, blame
from rui.core.platform import config_path, default_config_path


def write_config(path, content) -> str:
    """Write JSON `content` to `path` and return the path as a string."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content if isinstance(content, str) else json.dumps(content))
    return str(path)


class TestPlatform:
    """Unit tests for configuration file location."""

    def test_default_under_xdg_config_home(self, tmp_path) -> None:
        assert default_config_path() == os.path.join(str(tmp_path / 'config'), 'rui', 'config.json')

    def test_fallback_to_home(self, monkeypatch) -> None:
        monkeypatch.delenv('XDG_CONFIG_HOME')
        assert default_config_path().endswith(os.path.join('.config', 'rui', 'config.json'))

    def test_override(self, monkeypatch, tmp_path) -> None:
        monkeypatch.setenv('RUI_CONFIG', str(tmp_path / 'other.json'))
        assert config_path() == str(tmp_path / 'other.json')


class TestSettings:
    """Unit tests for `Settings` resolution."""

    def test_defaults(self) -> None:
        assert Settings.load() == Settings(notify=False, editor=None, flake=None, notifier='notify-send')

    def test_from_default_file(self, tmp_path) -> None:
        write_config(tmp_path / 'config' / 'rui' / 'config.json',
                     {'notify': True, 'flake': '/etc/nixos', 'editor': 'vim', 'notifier': 'dunstify'})
        assert Settings.load() == Settings(notify=True, editor='vim', flake='/etc/nixos', notifier='dunstify')

    def test_from_override_file(self, monkeypatch, tmp_path) -> None:
        monkeypatch.setenv('RUI_CONFIG', write_config(tmp_path / 'rui.json', {'flake': '/srv/flake'}))
        assert Settings.load().flake == '/srv/flake'

    def test_explicit_filepath(self, tmp_path) -> None:
        filepath = write_config(tmp_path / 'explicit.json', {'flake': '/srv/flake'})
        assert Settings.load(filepath).flake == '/srv/flake'

    def test_missing_file(self, tmp_path) -> None:
        assert Settings.load(str(tmp_path / 'missing.json')) == Settings()

    def test_malformed_file(self, tmp_path) -> None:
        filepath = write_config(tmp_path / 'bad.json', '{"flake": ')
        assert Settings.load(filepath) == Settings()

    def test_file_not_an_object(self, tmp_path) -> None:
        filepath = write_config(tmp_path / 'list.json', '[1, 2, 3]')
        assert Settings.load(filepath) == Settings()

    def test_null_values_ignored(self, monkeypatch, tmp_path) -> None:
        monkeypatch.setenv('EDITOR', 'nano')
        filepath = write_config(tmp_path / 'nulls.json', {'editor': None, 'flake': ''})
        settings = Settings.load(filepath)
        assert settings.editor == 'nano'
        assert settings.flake is None

    def test_env_beats_file(self, monkeypatch, tmp_path) -> None:
        filepath = write_config(tmp_path / 'config.json', {'flake': '/from/file'})
        monkeypatch.setenv('FLAKE', '/from/env')
        assert Settings.load(filepath).flake == '/from/env'

    def test_empty_env_does_not_mask_file(self, monkeypatch, tmp_path) -> None:
        filepath = write_config(tmp_path / 'config.json', {'flake': '/from/file'})
        monkeypatch.setenv('FLAKE', '')
        assert Settings.load(filepath).flake == '/from/file'

    def test_prefixed_env_beats_alias(self, monkeypatch) -> None:
        monkeypatch.setenv('FLAKE', '/from/alias')
        monkeypatch.setenv('RUI_FLAKE', '/from/prefixed')
        assert Settings.load().flake == '/from/prefixed'

    def test_notify_from_env(self, monkeypatch) -> None:
        monkeypatch.setenv('RUI_NOTIFY', 'true')
        assert Settings.load().notify is True

    def test_notify_wrong_type_ignored(self, tmp_path) -> None:
        filepath = write_config(tmp_path / 'config.json', {'notify': 'yes', 'flake': '/from/file'})
        assert Settings.load(filepath) == Settings(notify=False, flake='/from/file')

    def test_notifier_wrong_type_ignored(self, tmp_path) -> None:
        filepath = write_config(tmp_path / 'config.json', {'notifier': 5})
        assert Settings.load(filepath).notifier == 'notify-send'

    def test_editor_wrong_type_ignored(self, monkeypatch, tmp_path) -> None:
        monkeypatch.setenv('EDITOR', 'nano')
        filepath = write_config(tmp_path / 'config.json', {'editor': ['vim']})
        assert Settings.load(filepath).editor == 'nano'

    def test_flake_wrong_type_ignored(self, monkeypatch, tmp_path) -> None:
        filepath = write_config(tmp_path / 'config.json', {'flake': {'path': '/etc/nixos'}})
        assert Settings.load(filepath).flake is None

    def test_notify_wrong_type_from_env_ignored(self, monkeypatch, tmp_path) -> None:
        filepath = write_config(tmp_path / 'config.json', {'notify': True})
        monkeypatch.setenv('RUI_NOTIFY', 'yes')
        assert Settings.load(filepath).notify is True

    def test_editor_generic_fallback(self, monkeypatch) -> None:
        monkeypatch.setenv('EDITOR', 'nano')
        assert Settings.load().editor == 'nano'

    def test_editor_file_beats_generic(self, monkeypatch, tmp_path) -> None:
        monkeypatch.setenv('EDITOR', 'nano')
        filepath = write_config(tmp_path / 'config.json', {'editor': 'vim'})
        assert Settings.load(filepath).editor == 'vim'

    def test_editor_file_beats_specific(self, monkeypatch, tmp_path) -> None:
        monkeypatch.setenv('EDITOR', 'nano')
        monkeypatch.setenv('FLAKE_EDITOR', 'vim')
        filepath = write_config(tmp_path / 'config.json', {'editor': 'code'})
        assert Settings.load(filepath).editor == 'code'

    def test_editor_specific_beats_generic(self, monkeypatch) -> None:
        monkeypatch.setenv('EDITOR', 'nano')
        monkeypatch.setenv('FLAKE_EDITOR', 'vim')
        assert Settings.load().editor == 'vim'

    def test_editor_prefixed_beats_file(self, monkeypatch, tmp_path) -> None:
        monkeypatch.setenv('RUI_EDITOR', 'emacs')
        filepath = write_config(tmp_path / 'config.json', {'editor': 'code'})
        assert Settings.load(filepath).editor == 'emacs'

    def test_from_shared(self) -> None:
        settings = Settings(flake='/srv/flake')
        assert Settings.from_shared({'settings': settings}) is settings

    def test_from_shared_loads_if_missing(self, monkeypatch) -> None:
        monkeypatch.setenv('FLAKE', '/from/env')
        assert Settings.from_shared(None).flake == '/from/env'
        assert Settings.from_shared({}).flake == '/from/env'


class TestLayers:
    """Unit tests for configuration layers."""

    def test_missing_file_empty(self, tmp_path) -> None:
        assert load_file(str(tmp_path / 'missing.json')) == {}

    def test_env_excludes_config_path(self, monkeypatch, tmp_path) -> None:
        monkeypatch.setenv('RUI_CONFIG', str(tmp_path / 'config.json'))
        monkeypatch.setenv('RUI_LOGGING_LEVEL', 'debug')
        assert load_env() == {'logging': {'level': 'debug'}}

    def test_env_aliases(self, monkeypatch) -> None:
        monkeypatch.setenv('FLAKE', '/from/env')
        monkeypatch.setenv('FLAKE_EDITOR', 'code')
        assert load_env() == {'flake': '/from/env'}

    def test_logging_level_default(self) -> None:
        assert load().logging.level == 'warning'


class TestBlame:
    """Unit tests for `blame`."""

    def test_editor_from_environment(self, monkeypatch) -> None:
        monkeypatch.setenv('EDITOR', 'nano')
        assert blame(load(), 'editor') == 'from: EDITOR'
        monkeypatch.setenv('FLAKE_EDITOR', 'vim')
        assert blame(load(), 'editor') == 'from: FLAKE_EDITOR'

    def test_default(self) -> None:
        assert blame(load(), 'notifier') == 'from: <default>'

    def test_file(self, monkeypatch, tmp_path) -> None:
        filepath = write_config(tmp_path / 'config.json', {'flake': '/from/file'})
        monkeypatch.setenv('RUI_CONFIG', filepath)
        assert blame(load(), 'flake') == f'from: {filepath}'

    def test_alias(self, monkeypatch) -> None:
        monkeypatch.setenv('FLAKE', '/from/env')
        assert blame(load(), 'flake') == 'from: FLAKE'

    def test_prefixed(self, monkeypatch) -> None:
        monkeypatch.setenv('RUI_LOGGING_LEVEL', 'info')
        assert blame(load(), 'logging', 'level') == 'from: RUI_LOGGING_LEVEL'

    def test_not_found(self) -> None:
        assert blame(load(), 'nothing') is None


class TestInvalidValues:
    """Wrongly typed values degrade to the layer below with a warning."""

    def test_logging_not_a_section(self, tmp_path, caplog) -> None:
        filepath = write_config(tmp_path / 'config.json', {'logging': 'x'})
        assert load(filepath).logging.level == 'warning'
        assert 'Ignoring `logging`' in caplog.text

    def test_logging_level_not_a_string(self, tmp_path, caplog) -> None:
        filepath = write_config(tmp_path / 'config.json', {'logging': {'level': 5, 'datefmt': '%H:%M'}})
        config = load(filepath)
        assert config.logging.level == 'warning'
        assert config.logging.datefmt == '%H:%M'
        assert 'Ignoring `logging.level`' in caplog.text

    def test_logging_level_unsupported(self, tmp_path) -> None:
        filepath = write_config(tmp_path / 'config.json', {'logging': {'level': 'verbose'}})
        assert load(filepath).logging.level == 'warning'

    def test_logging_level_from_env(self, monkeypatch) -> None:
        monkeypatch.setenv('RUI_LOGGING_LEVEL', '5')
        assert load().logging.level == 'warning'

    def test_logging_level_valid(self, tmp_path) -> None:
        filepath = write_config(tmp_path / 'config.json', {'logging': {'level': 'trace'}})
        assert load(filepath).logging.level == 'trace'

    def test_unknown_fields_kept(self, tmp_path) -> None:
        filepath = write_config(tmp_path / 'config.json', {'theme': 5})
        assert load_file(filepath) == {'theme': 5}

    def test_warning_names_field(self, tmp_path, caplog) -> None:
        filepath = write_config(tmp_path / 'config.json', {'notify': 'yes'})
        load_file(filepath)
        assert f'Ignoring `notify` from {filepath}' in caplog.text
