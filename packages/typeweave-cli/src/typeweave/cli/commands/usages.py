from pathlib import Path

import typer

from typeweave.analysis import find_usages
from typeweave.cli.factories import load_module
from typeweave.common import bus


def usages_command(
    outer: Path = typer.Argument(..., help="The enclosing code block."),
    inner: Path = typer.Argument(..., help="The block being completed."),
):
    context = find_usages(load_module(outer), load_module(inner))
    if not context:
        bus.debug("usages.none")
        return

    bus.debug("usages.found", count=len(context), name=context.name)
    bus.data(context.render())
