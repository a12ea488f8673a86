"""Consolidated CLI for competition rundown tools."""

import typer

from rundown.cli import app as rundown_app

# Create main application
app = typer.Typer(
    name="rundown-tools",
    help="Competition rundown tools",
    no_args_is_help=True,
)

# Register subcommands
app.add_typer(rundown_app, name="rundown", help="Heat and station scheduling commands")


def main():
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
