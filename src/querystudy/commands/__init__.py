"""Subcommand modules for querystudy.

Provides register_commands() which uses deferred imports to keep
``querystudy --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register the command groups and standalone commands on the root group."""
    # --- Groups ---
    from querystudy.commands.bulk import bulk
    from querystudy.commands.query import query

    cli.add_command(query)
    cli.add_command(bulk)

    # --- Standalone commands ---
    from querystudy.commands.init_cmd import init_cmd

    cli.add_command(init_cmd)
