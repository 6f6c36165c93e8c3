"""CLI entry point: x86-toolchain.

    x86-toolchain [ options ] <assembly filename> [-o | --output <output filename>]

All tokens are handed to the resolver unchanged; see ``resolver.USAGE``.
"""

from __future__ import annotations

import sys

import click

from x86_toolchain.core.logging import setup_logging
from x86_toolchain.core.settings import ToolchainSettings
from x86_toolchain.exceptions import (
    SourceNotFoundError,
    StageError,
    ToolLaunchError,
    UsageError,
)
from x86_toolchain.models.config import BuildConfig
from x86_toolchain.pipeline import BuildPipeline
from x86_toolchain.progress import PhaseProgress
from x86_toolchain.resolver import resolve
from x86_toolchain.tools.gnu import default_toolchain

# (phase, status) -> line printed on stdout
_ALWAYS_MESSAGES = {
    ("qemu", "running"): "Starting QEMU ...\n",
}
_VERBOSE_MESSAGES = {
    **_ALWAYS_MESSAGES,
    ("assemble", "running"): "NASM started...",
    ("assemble", "completed"): "NASM finished",
    ("link", "running"): "Linking ...",
    ("link", "completed"): "Linking finished",
}


def _progress_printer(verbose: bool):
    messages = _VERBOSE_MESSAGES if verbose else _ALWAYS_MESSAGES

    def on_phase(phase: PhaseProgress) -> None:
        message = messages.get((phase.phase, phase.status))
        if message:
            click.echo(message)

    return on_phase


def _echo_config(config: BuildConfig) -> None:
    click.echo("Arguments being set:")
    for line in config.describe():
        click.echo(f"\t{line}")
    click.echo("")


@click.command(
    context_settings={"ignore_unknown_options": True, "help_option_names": []},
)
@click.argument("args", nargs=-1, type=click.UNPROCESSED)
def main(args: tuple[str, ...]) -> None:
    """Assemble, link and optionally run an x86 program under qemu or gdb."""
    settings = ToolchainSettings.from_env()
    setup_logging(settings.log_level, settings.log_format)

    try:
        config = resolve(args)
    except UsageError as e:
        if args:
            click.echo(str(e), err=True)
        click.echo(e.usage, err=True)
        sys.exit(e.exit_code)
    except SourceNotFoundError as e:
        click.echo("Specified file does not exist", err=True)
        sys.exit(e.exit_code)

    if config.verbose:
        setup_logging("DEBUG", settings.log_format)
        _echo_config(config)

    pipeline = BuildPipeline(default_toolchain(settings))
    pipeline.progress.callbacks.append(_progress_printer(config.verbose))

    try:
        rc = pipeline.execute(config)
    except ToolLaunchError as e:
        click.echo(f"Error: {e}", err=True)
        rc = e.exit_code
    except StageError as e:
        # The tool has already reported its own diagnostics.
        rc = e.exit_code

    if config.verbose:
        click.echo("")
        for line in pipeline.progress.format_summary():
            click.echo(line)

    sys.exit(rc)


if __name__ == "__main__":
    main()
