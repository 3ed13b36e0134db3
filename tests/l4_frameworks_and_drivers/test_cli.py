"""Tests for CLI entry point — patches deferred imports at source module level."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import MagicMock, patch

from click.testing import CliRunner

from clip_scribe import __version__
from clip_scribe.l4_frameworks_and_drivers.cli import cli

# Patch targets at SOURCE module level (not cli module) because cli() uses
# deferred `from X import Y` which creates local bindings that bypass
# module-level attribute patches.
_LOGGING = 'clip_scribe.l4_frameworks_and_drivers.logging_setup.setup_file_logging'
_CONTAINER = 'clip_scribe.l4_frameworks_and_drivers.container.DependencyContainer'
_RUN_BATCH = 'clip_scribe.l4_frameworks_and_drivers.batch_runner.run_batch'
_DROP_APP = 'clip_scribe.l4_frameworks_and_drivers.apps.drop_app.DropApp'
_DEFAULT_PATHS = 'clip_scribe.l3_interface_adapters.gateways.yaml_config_loader.DEFAULT_CONFIG_PATHS'


def _audio(tmp_path: Path, name: str = 'clip.wav') -> Path:
    p = tmp_path / name
    p.write_bytes(b'fake')
    return p


class TestCli:
    def test_version(self):
        result = CliRunner().invoke(cli, ['--version'])
        assert result.exit_code == 0
        assert __version__ in result.output

    def test_help_lists_options(self):
        result = CliRunner().invoke(cli, ['--help'])
        assert result.exit_code == 0
        for flag in ('--config', '--model', '--no-copy'):
            assert flag in result.output

    @patch(_LOGGING)
    @patch(_CONTAINER)
    @patch(_RUN_BATCH, return_value=0)
    def test_batch_mode_success(self, mock_run, mock_container_cls, _log, tmp_path):
        audio = _audio(tmp_path)
        with patch(_DEFAULT_PATHS, [tmp_path / 'none.yaml']):
            result = CliRunner().invoke(cli, [str(audio)])

        assert result.exit_code == 0
        paths, container = mock_run.call_args[0]
        assert paths == [audio]
        assert container is mock_container_cls.return_value

    @patch(_LOGGING)
    @patch(_CONTAINER)
    @patch(_RUN_BATCH, return_value=2)
    def test_batch_mode_failures_exit_nonzero(self, _run, _container, _log, tmp_path):
        with patch(_DEFAULT_PATHS, [tmp_path / 'none.yaml']):
            result = CliRunner().invoke(cli, [str(_audio(tmp_path))])
        assert result.exit_code == 1

    @patch(_LOGGING)
    @patch(_CONTAINER)
    @patch(_RUN_BATCH, return_value=0)
    def test_model_and_no_copy_override_config(self, _run, mock_container_cls, _log, tmp_path):
        with patch(_DEFAULT_PATHS, [tmp_path / 'none.yaml']):
            result = CliRunner().invoke(cli, ['-m', 'base.en', '--no-copy', str(_audio(tmp_path))])

        assert result.exit_code == 0
        config = mock_container_cls.call_args[0][0]
        assert config.transcription.model == 'base.en'
        assert config.ui.auto_copy is False

    @patch(_LOGGING)
    @patch(_CONTAINER)
    @patch(_RUN_BATCH, return_value=0)
    def test_config_file_is_used(self, _run, mock_container_cls, _log, sample_config_yaml, tmp_path):
        result = CliRunner().invoke(cli, ['-c', str(sample_config_yaml), str(_audio(tmp_path))])

        assert result.exit_code == 0
        config = mock_container_cls.call_args[0][0]
        assert config.transcription.model == 'base.en'
        assert config.audio.max_duration_seconds == 60

    def test_missing_config_rejected(self, tmp_path):
        result = CliRunner().invoke(cli, ['-c', str(tmp_path / 'missing.yaml')])
        assert result.exit_code != 0

    @patch(_LOGGING)
    def test_invalid_config_exits_with_error(self, _log, tmp_path):
        bad = tmp_path / 'bad.yaml'
        bad.write_text('audio:\n  max_duration_seconds: -1\n', encoding='utf-8')

        result = CliRunner().invoke(cli, ['-c', str(bad), str(_audio(tmp_path))])

        assert result.exit_code == 1
        assert 'Error:' in result.output

    @patch(_LOGGING, side_effect=OSError('read-only fs'))
    @patch(_CONTAINER)
    @patch(_RUN_BATCH, return_value=0)
    def test_logging_failure_only_warns(self, _run, _container, _log, tmp_path):
        with patch(_DEFAULT_PATHS, [tmp_path / 'none.yaml']):
            result = CliRunner().invoke(cli, [str(_audio(tmp_path))])

        assert result.exit_code == 0
        assert 'file logging disabled' in result.output

    @patch(_LOGGING)
    @patch(_CONTAINER)
    @patch(_DROP_APP)
    def test_no_files_launches_drop_app(self, mock_app_cls, mock_container_cls, _log, tmp_path):
        mock_app_cls.return_value = MagicMock()
        with patch(_DEFAULT_PATHS, [tmp_path / 'none.yaml']):
            result = CliRunner().invoke(cli, [])

        assert result.exit_code == 0
        kwargs = mock_app_cls.call_args.kwargs
        assert kwargs['container'] is mock_container_cls.return_value
        mock_app_cls.return_value.run.assert_called_once()
