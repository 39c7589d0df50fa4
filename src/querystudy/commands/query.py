"""Command group: member search, team statistics, and projections."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from querystudy.domain.search import ProjectionShape, SearchStrategy
from querystudy.services.member import MemberService

if TYPE_CHECKING:
    from querystudy.commands._context import AppContext


@click.group(
    epilog="""\b
Examples:
  querystudy query search --username member1 --age 10
  querystudy query search --age 10 --strategy where
  querystudy query teams
  querystudy --json query dto --shape user
  querystudy query grades""",
)
def query() -> None:
    """Read-only queries over the sample members."""


@query.command()
@click.option("--username", default=None, help="Exact username to match.")
@click.option("--age", default=None, type=int, help="Exact age to match.")
@click.option(
    "--strategy",
    type=click.Choice([s.value for s in SearchStrategy]),
    default=SearchStrategy.FOLD.value,
    show_default=True,
    help="fold: one combined condition; where: one condition per filter.",
)
@click.pass_obj
def search(app: AppContext, username: str | None, age: int | None, strategy: str) -> None:
    """Find members by optional username and age filters.

    Omitted filters match everything; with no filters every member is listed.
    """
    app.emit(MemberService(app.db).search(username=username, age=age, strategy=strategy))


@query.command()
@click.pass_obj
def teams(app: AppContext) -> None:
    """Average member age per team."""
    app.emit(MemberService(app.db).team_stats())


@query.command()
@click.option(
    "--shape",
    type=click.Choice([s.value for s in ProjectionShape]),
    default=ProjectionShape.MEMBER.value,
    show_default=True,
    help="member: by field name; user: aliased fields; constructor: positional.",
)
@click.pass_obj
def dto(app: AppContext, shape: str) -> None:
    """Project members onto a DTO."""
    app.emit(MemberService(app.db).project(shape))


@query.command()
@click.pass_obj
def grades(app: AppContext) -> None:
    """Rank members by age bracket using CASE expressions."""
    app.emit(MemberService(app.db).age_brackets())
