from __future__ import annotations

from collections.abc import Callable
from typing import TypeVar

from .click_compat import click
from .context import CLIContext

F = TypeVar("F", bound=Callable[..., object])


def _override_output(
    ctx: click.Context, param: click.Parameter, value: str | bool | None
) -> None:
    """Per-command --output/--json win over the group-level choice."""
    if not value:
        return
    obj = ctx.obj
    if isinstance(obj, CLIContext):
        obj.output = "json" if param.name == "json" else value  # type: ignore[assignment]


def output_options(fn: F) -> F:
    fn = click.option(
        "--output",
        type=click.Choice(["table", "json"]),
        default=None,
        help="Override output format for this command.",
        callback=_override_output,
        expose_value=False,
    )(fn)
    return click.option(
        "--json",
        is_flag=True,
        help="Alias for --output json.",
        callback=_override_output,
        expose_value=False,
    )(fn)


def filter_text_argument(fn: F) -> F:
    """The filter text positional; '-' reads it from stdin."""
    return click.argument("text", metavar="TEXT", type=str)(fn)
