from __future__ import annotations

import logging
from urllib.parse import urlencode

from stackfilter.filters import FilterSyntaxError, IncludesExcludes, parse, unwrap

from ..click_compat import RichCommand, click
from ..context import CLIContext
from ..errors import CLIError
from ..options import filter_text_argument, output_options
from ..runner import CommandOutput, run_command

logger = logging.getLogger(__name__)


def _parse_filter(text: str) -> IncludesExcludes:
    """Parse filter text, turning a syntax error into a CLI parse_error."""
    try:
        terms = unwrap(parse(text))
    except FilterSyntaxError as exc:
        raise CLIError.from_filter_syntax(exc, text=text) from exc
    logger.info(
        "Parsed filter: %d include(s), %d exclude(s)", len(terms.includes), len(terms.excludes)
    )
    return terms


@click.command(name="parse", cls=RichCommand)
@filter_text_argument
@output_options
@click.pass_obj
def parse_cmd(ctx: CLIContext, text: str) -> None:
    """Split filter TEXT into include and exclude terms.

    Terms are separated by spaces. Quote a term ('...' or "...") to keep
    spaces in it, and prefix it with '-' to exclude it. Use '-' as TEXT to
    read the filter from stdin, and put `--` before TEXT that itself
    starts with a minus (stackfilter parse -- "-sleep park").
    """

    def fn(ctx: CLIContext, _warnings: list[str]) -> CommandOutput:
        terms = _parse_filter(ctx.read_filter_text(text))
        return CommandOutput(data=terms.to_dict())

    run_command(ctx, command="parse", fn=fn)


@click.command(name="params", cls=RichCommand)
@filter_text_argument
@output_options
@click.pass_obj
def params_cmd(ctx: CLIContext, text: str) -> None:
    """Show the include/exclude request parameters for filter TEXT."""

    def fn(ctx: CLIContext, warnings: list[str]) -> CommandOutput:
        terms = _parse_filter(ctx.read_filter_text(text))
        if terms.is_empty:
            warnings.append("No terms; request would be skipped.")
        params = terms.to_query_params()
        return CommandOutput(
            data={"params": [list(p) for p in params], "query": urlencode(params)},
        )

    run_command(ctx, command="params", fn=fn)


@click.command(name="format", cls=RichCommand)
@filter_text_argument
@output_options
@click.pass_obj
def format_cmd(ctx: CLIContext, text: str) -> None:
    """Rewrite filter TEXT in canonical form (includes first, minimal quoting)."""

    def fn(ctx: CLIContext, _warnings: list[str]) -> CommandOutput:
        terms = _parse_filter(ctx.read_filter_text(text))
        return CommandOutput(data={"text": terms.to_string()})

    run_command(ctx, command="format", fn=fn)
