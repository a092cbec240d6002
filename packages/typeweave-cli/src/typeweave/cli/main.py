import logging

import typer

from typeweave.common import bus
from .rendering import CliRenderer

# Import commands
from .commands.check import check_command
from .commands.holes import holes_command
from .commands.usages import usages_command

app = typer.Typer(
    name="typeweave",
    help="Evaluate model completions of missing type annotations.",
    no_args_is_help=True,
)


@app.callback()
def main(
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Show debug output."
    ),
):
    cli_renderer = CliRenderer(verbose=verbose)
    bus.set_renderer(cli_renderer)
    logging.basicConfig(level=logging.DEBUG if verbose else logging.WARNING)


# Register commands
app.command(
    name="check", help="Check a completion against the file it completes."
)(check_command)
app.command(
    name="usages", help="Print the usage context of the name an inner block introduces."
)(usages_command)
app.command(
    name="holes", help="Print a file with every missing annotation made a hole."
)(holes_command)


if __name__ == "__main__":
    app()
