"""Command: database initialization (named init_cmd to avoid shadowing builtins)."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from querystudy.services.member import MemberService
from querystudy.services.result import ServiceResult

if TYPE_CHECKING:
    from querystudy.commands._context import AppContext


@click.command(
    "init",
    epilog="""\b
Examples:
  querystudy init
  querystudy init --no-seed
  querystudy --database-url sqlite:////tmp/study.db init""",
)
@click.option("--no-seed", is_flag=True, help="Create the schema without sample data.")
@click.pass_obj
def init_cmd(app: AppContext, no_seed: bool) -> None:
    """Create the schema and load the sample teams and members."""
    db = app.db
    if no_seed or not app.settings.seed.enabled:
        app.emit(
            ServiceResult(
                ok=True,
                op="init",
                data={
                    "database": db.engine.url.render_as_string(hide_password=True),
                    "seeded": False,
                },
            )
        )
        return
    app.emit(MemberService(db).seed())
