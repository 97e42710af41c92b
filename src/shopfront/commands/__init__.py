"""Subcommand modules for shopfront.

Provides register_commands() which uses deferred imports to keep
``shopfront --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register all standalone commands on the root CLI group."""
    from shopfront.commands.chain import chain
    from shopfront.commands.keys import keys

    cli.add_command(keys)
    cli.add_command(chain)
