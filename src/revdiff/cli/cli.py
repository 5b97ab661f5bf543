"""CLI entrypoint: Typer app definition and command registration"""

import typer

from revdiff.cli.commands import (
    clear_cmd, count_cmd, diff_cmd, init_cmd, list_cmd, patch_cmd, review_cmd, show_cmd,
)


app = typer.Typer(name="revdiff", no_args_is_help=True, help="Provider-agnostic unified diffs for code review")

app.command(name="diff")(diff_cmd)
app.command(name="patch")(patch_cmd)
app.command(name="count")(count_cmd)
app.command(name="review")(review_cmd)
app.command(name="show")(show_cmd)
app.command(name="list")(list_cmd)
app.command(name="clear")(clear_cmd)
app.command(name="init")(init_cmd)
