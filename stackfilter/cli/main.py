from __future__ import annotations

from pathlib import Path

import stackfilter

from .click_compat import RichGroup, click
from .context import CLIContext
from .logging import configure_logging, restore_logging
from .paths import get_paths


@click.group(
    name="stackfilter",
    invoke_without_command=True,
    context_settings={"help_option_names": ["-h", "--help"]},
    cls=RichGroup,
)
@click.option(
    "--output",
    type=click.Choice(["table", "json"]),
    default=None,
    help="Output format (default: STACKFILTER_OUTPUT, config file, then table).",
)
@click.option("--json", "json_flag", is_flag=True, help="Alias for --output json.")
@click.option("-q", "--quiet", is_flag=True, help="Suppress non-essential stderr output.")
@click.option("-v", "verbose", count=True, help="Increase verbosity (-v, -vv).")
@click.option(
    "--log-file",
    type=click.Path(dir_okay=False),
    default=None,
    help="Also write debug logs to this file.",
)
@click.option("--no-log-file", is_flag=True, help="Disable file logging explicitly.")
@click.version_option(version=stackfilter.__version__, prog_name="stackfilter")
@click.pass_context
def cli(
    click_ctx: click.Context,
    *,
    output: str | None,
    json_flag: bool,
    quiet: bool,
    verbose: int,
    log_file: str | None,
    no_log_file: bool,
) -> None:
    """Parse include/exclude profile filter expressions."""
    if click_ctx.invoked_subcommand is None:
        # No args: show help.
        click.echo(click_ctx.get_help())
        raise click.exceptions.Exit(0)

    out = "json" if json_flag else output

    click_ctx.obj = CLIContext(
        output=out,  # type: ignore[arg-type]
        quiet=quiet,
        verbosity=verbose,
        _paths=get_paths(),
    )

    previous_logging = configure_logging(
        verbosity=verbose,
        log_file=Path(log_file) if log_file else None,
        enable_file=not no_log_file,
    )
    click_ctx.call_on_close(lambda: restore_logging(previous_logging))


# Register commands
from .commands.config_cmds import config_group as _config_group  # noqa: E402
from .commands.filter_cmds import format_cmd as _format_cmd  # noqa: E402
from .commands.filter_cmds import params_cmd as _params_cmd  # noqa: E402
from .commands.filter_cmds import parse_cmd as _parse_cmd  # noqa: E402
from .commands.version_cmd import version_cmd as _version_cmd  # noqa: E402

cli.add_command(_parse_cmd)
cli.add_command(_params_cmd)
cli.add_command(_format_cmd)
cli.add_command(_version_cmd)
cli.add_command(_config_group)


def main() -> None:
    cli(prog_name="stackfilter")
