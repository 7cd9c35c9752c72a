"""The mikros command line."""

from __future__ import annotations

import sys
from collections.abc import Sequence

import click

from mikroscli import config_edit, settings
from mikroscli.settings import Settings


def build_cli(cfg: Settings) -> click.Group:
    """Build the root command with its subcommands."""

    @click.group(
        name="mikros",
        help=(
            "mikros is a command to help the developer use the mikros\n"
            "framework to create new services."
        ),
        short_help='A "swiss army knife" for dealing with mikros framework tasks.',
    )
    @click.pass_context
    def root(ctx: click.Context) -> None:
        ctx.obj = cfg

    @root.group(
        name="config",
        invoke_without_command=True,
        help=(
            "config helps installing and adjusting mikros related requirements\n"
            "inside the system."
        ),
        short_help="Set up mikros related requirements",
    )
    @click.pass_context
    def config(ctx: click.Context) -> None:
        if ctx.invoked_subcommand is None:
            click.echo(ctx.get_help())

    @config.command(
        name="edit",
        help=(
            "edit command opens (or creates if it does not exist) the\n"
            "mikros CLI settings file into a form allowing it to be\n"
            "customized."
        ),
        short_help="Edit the configuration file",
    )
    def edit() -> None:
        config_edit.edit()

    @config.command(
        name="generate",
        help=(
            "generate creates and installs all default settings into the\n"
            "CLI TOML file, located in $HOME/.mikros/config.toml"
        ),
        short_help="Create and install default settings",
    )
    def generate() -> None:
        settings.create_default_settings()

    return root


def main(argv: Sequence[str] | None = None) -> int:
    """Run the command line and return its exit status."""
    try:
        cfg = settings.load()
    except Exception as exc:  # any settings failure stops the program
        click.echo(f"FATA {exc}", err=True)
        return 1

    command = build_cli(cfg)
    args = list(sys.argv[1:] if argv is None else argv)
    try:
        result = command.main(args=args, prog_name="mikros", standalone_mode=False)
    except click.exceptions.Exit as exc:
        return exc.exit_code
    except click.ClickException as exc:
        exc.show()
        return 1
    except (click.Abort, EOFError, KeyboardInterrupt):
        return 1
    except Exception as exc:  # report command failures like the CLI does
        click.echo(f"Error: {exc}", err=True)
        return 1

    return result if isinstance(result, int) else 0