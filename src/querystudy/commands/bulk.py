"""Command group: single-statement updates and deletes."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from querystudy.services.member import MemberService

if TYPE_CHECKING:
    from querystudy.commands._context import AppContext


@click.group(
    epilog="""\b
Examples:
  querystudy bulk age-up
  querystudy bulk age-up --delta 5
  querystudy bulk delete-older --age 18""",
)
def bulk() -> None:
    """Bulk UPDATE/DELETE without loading members one by one."""


@bulk.command("age-up")
@click.option("--delta", default=1, type=int, show_default=True, help="Years to add.")
@click.pass_obj
def age_up(app: AppContext, delta: int) -> None:
    """Add DELTA to every member's age."""
    app.emit(MemberService(app.db).bulk_age_up(delta))


@bulk.command("delete-older")
@click.option("--age", required=True, type=int, help="Delete members strictly older than this.")
@click.pass_obj
def delete_older(app: AppContext, age: int) -> None:
    """Delete every member older than AGE."""
    app.emit(MemberService(app.db).bulk_delete_older(age))
