#!/usr/bin/env python3
"""
statecell CLI

Main entrypoint for the statecell command-line tool.
"""

import typer
from rich.console import Console
from rich.table import Table

from .commands import replay

# Initialize Typer app
app = typer.Typer(
    name="statecell",
    help="Predictable state container tools",
    add_completion=False,
)

# Console for rich output
console = Console()

app.command(name="replay")(replay.replay_command)


@app.command()
def version():
    """Show version information."""
    from statecell import __version__

    table = Table(show_header=False, box=None)
    table.add_row("[bold]statecell[/bold]", f"v{__version__}")
    console.print(table)


def main():
    """Main entrypoint."""
    app()


if __name__ == "__main__":
    main()
