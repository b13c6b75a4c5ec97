"""Typer application for fb.

The root command lists tickets; flags switch it into the other modes.
Mode flags are checked in this order and the first one present wins:

    --list-bins, --list-boards, -c TEXT, -o, bare words, --comment,
    (list tickets)

Bare words after the options ("fb fixed the bug") are joined and posted
to the checked-out ticket like -c, unless --comment or --bin is given.

"fb checkout" and "fb clear" are subcommands. Global flags such as
--verbose go before the subcommand name.
"""

from pathlib import Path
from typing import Annotated, Any, Optional

import typer
from typer.core import TyperGroup

from fb import SCRIPT_NAME, __version__
from fb.cli import commands
from fb.cli.checkout import checkout, clear
from fb.cli.context import CliContext
from fb.cli.errors import handle_errors
from fb.config.settings import CONFIG_DIR
from fb.utils.console import print_info, print_metric
from fb.utils.logging import setup_logging

WORDS_COMMAND_NAME = "comment-words"


class QuickCommentGroup(TyperGroup):
    """Root group that routes unknown leading words to a quick comment."""

    def resolve_command(
        self, ctx: typer.Context, args: list[str]
    ) -> tuple[Optional[str], Any, list[str]]:
        if args and not args[0].startswith("-") and self.get_command(ctx, args[0]) is None:
            return WORDS_COMMAND_NAME, typer.main.get_command(words_app), args
        return super().resolve_command(ctx, args)


app = typer.Typer(
    name=SCRIPT_NAME,
    cls=QuickCommentGroup,
    help="Flow Boards ticket viewer",
    add_completion=False,
    no_args_is_help=False,
    context_settings={"help_option_names": ["-h", "--help"]},
)
words_app = typer.Typer(add_completion=False)


def version_callback(value: bool) -> None:
    """Display version and exit."""
    if value:
        print_info(f"{SCRIPT_NAME} version {__version__}")
        raise typer.Exit()


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    bin_name: Annotated[
        Optional[str],
        typer.Option(
            "--bin",
            help="Filter tickets by bin name or ID",
        ),
    ] = None,
    board_name: Annotated[
        Optional[str],
        typer.Option(
            "--board",
            help="Filter tickets by board name or ID",
        ),
    ] = None,
    list_bins: Annotated[
        bool,
        typer.Option(
            "--list-bins",
            help="List all available bins",
        ),
    ] = False,
    list_boards: Annotated[
        bool,
        typer.Option(
            "--list-boards",
            help="List all available boards",
        ),
    ] = False,
    comment: Annotated[
        bool,
        typer.Option(
            "--comment",
            help="Pick a ticket and add a comment (respects --bin)",
        ),
    ] = False,
    quick_comment: Annotated[
        Optional[str],
        typer.Option(
            "-c",
            help="Add a comment to the checked-out ticket",
        ),
    ] = None,
    show_status: Annotated[
        bool,
        typer.Option(
            "-o",
            help="Show the current checkout",
        ),
    ] = False,
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "--debug",
            "-v",
            help="Show debug logs and timing on stderr",
        ),
    ] = False,
    home: Annotated[
        Path,
        typer.Option(
            "--home",
            envvar="FB_HOME",
            hidden=True,
            help="Directory for config.yaml and checkout state",
        ),
    ] = CONFIG_DIR,
    version: Annotated[
        Optional[bool],
        typer.Option(
            "--version",
            callback=version_callback,
            is_eager=True,
            help="Show version information",
        ),
    ] = None,
) -> None:
    """List your Flow Boards tickets.

    Use flags to list bins or boards, comment on tickets, or inspect the
    current checkout. "fb fixed the bug" comments on the checked-out ticket.
    """
    setup_logging(verbose=verbose)

    state = CliContext(home=home, verbose=verbose)
    ctx.obj = state
    if verbose:
        ctx.call_on_close(lambda: print_metric(f"Total execution time: {state.elapsed():.3f}s"))

    if ctx.invoked_subcommand is not None:
        return

    run_mode(state, ctx.params)


def run_mode(
    state: CliContext,
    options: dict[str, Any],
    words: Optional[list[str]] = None,
) -> None:
    """Run the mode selected by the root command's options.

    Args:
        state: Per-invocation context
        options: Parsed root options, keyed by parameter name
        words: Bare words given after the options
    """
    with handle_errors():
        if options["list_bins"]:
            commands.list_bins(state)
        elif options["list_boards"]:
            commands.list_boards(state)
        elif options["quick_comment"] is not None:
            commands.quick_comment(state, options["quick_comment"])
        elif options["show_status"]:
            commands.show_status(state)
        elif words and not options["comment"] and not options["bin_name"]:
            commands.quick_comment(state, " ".join(words))
        elif options["comment"]:
            commands.interactive_comment(state, options["bin_name"])
        else:
            commands.list_tickets(state, options["bin_name"], options["board_name"])


@words_app.command(context_settings={"ignore_unknown_options": True})
def comment_words(
    ctx: typer.Context,
    words: Annotated[list[str], typer.Argument(help="Comment text")],
) -> None:
    """Post the words as a comment on the checked-out ticket."""
    run_mode(ctx.obj, ctx.parent.params, words)


app.command("checkout")(checkout)
app.command("clear")(clear)


__all__ = [
    "app",
    "main",
    "run_mode",
    "version_callback",
]
