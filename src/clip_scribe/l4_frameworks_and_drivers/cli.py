"""CLI entry point for clip-scribe."""

from __future__ import annotations

import sys
from pathlib import Path

import click

from clip_scribe import __version__


@click.command()
@click.argument(
    'audio_files',
    nargs=-1,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
)
@click.option(
    '-c',
    '--config',
    'config_path',
    default=None,
    type=click.Path(exists=True),
    help='Path to YAML config file.',
)
@click.option(
    '-m',
    '--model',
    default=None,
    help="Whisper model name or path to a ggml file (e.g. 'tiny', 'base.en').",
)
@click.option(
    '--no-copy',
    is_flag=True,
    default=False,
    help='Do not copy the transcript to the clipboard.',
)
@click.version_option(version=__version__)
def cli(audio_files, config_path, model, no_copy):
    """clip-scribe -- on-device transcription of short audio clips.

    With AUDIO_FILES, transcribe each file and print the text. Without, open
    the interactive drop window.
    """
    from clip_scribe.l3_interface_adapters.gateways.yaml_config_loader import (  # noqa: PLC0415 -- deferred: yaml stack not loaded on --help
        YamlConfigLoader,
    )
    from clip_scribe.l4_frameworks_and_drivers.config import (  # noqa: PLC0415 -- deferred: not needed for --help
        build_app_config,
    )
    from clip_scribe.l4_frameworks_and_drivers.logging_setup import (  # noqa: PLC0415 -- deferred: not needed for --help
        setup_file_logging,
    )

    overrides: dict = {}
    if model:
        overrides['transcription'] = {'model': model}
    if no_copy:
        overrides['ui'] = {'auto_copy': False}

    try:
        raw = YamlConfigLoader().load_raw(config_path, overrides=overrides or None)
        config = build_app_config(raw)
    except (FileNotFoundError, ValueError) as e:
        click.echo(f'Error: {e}', err=True)
        sys.exit(1)

    try:
        setup_file_logging()
    except OSError as e:
        click.echo(f'Warning: file logging disabled ({e}).', err=True)

    from clip_scribe.l4_frameworks_and_drivers.container import (  # noqa: PLC0415 -- deferred: pywhispercpp not loaded on --help
        DependencyContainer,
    )

    container = DependencyContainer(config)

    if audio_files:
        from clip_scribe.l4_frameworks_and_drivers.batch_runner import (  # noqa: PLC0415 -- deferred: batch mode only
            run_batch,
        )

        failures = run_batch(list(audio_files), container)
        sys.exit(1 if failures else 0)

    from clip_scribe.l4_frameworks_and_drivers.apps.drop_app import (  # noqa: PLC0415 -- deferred: Textual TUI not loaded for batch mode
        DropApp,
    )

    DropApp(config=config, container=container).run()
