"""AppContext: shared Click context for all commands.

Created once by the root CLI group and flows to all subcommands via
``@click.pass_obj``. Provides lazy Database initialization and centralized
result emission (stdout/stderr routing + exit codes).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from querystudy.output.formatters import OutputSettings, format_result

if TYPE_CHECKING:
    from querystudy.config.settings import QueryStudySettings
    from querystudy.infrastructure.database.engine import Database
    from querystudy.services.result import ServiceResult


class AppContext:
    """Shared context flowing through Click's command hierarchy.

    The database is created lazily on first use so ``--help`` and
    ``--version`` never touch the filesystem.
    """

    def __init__(self, settings: QueryStudySettings) -> None:
        self.settings = settings
        self._db: Database | None = None

        from querystudy.config.logging import configure_logging

        configure_logging(
            verbose=settings.verbose,
            log_json=settings.log_json,
            sql_echo=settings.database.echo,
        )

    @property
    def db(self) -> Database:
        """The database (created, with its schema, on first access)."""
        if self._db is None:
            from querystudy.infrastructure.database.engine import Database

            self._db = Database.from_settings(self.settings)
        return self._db

    def close(self) -> None:
        if self._db is not None:
            self._db.close()
            self._db = None

    def emit(self, result: ServiceResult) -> None:
        """Format and output a ServiceResult with correct exit semantics.

        * Success (``result.ok``): writes to stdout, returns normally.
          Warnings are emitted to stderr so they don't pollute piped output.
        * Failure: writes to stderr, exits with code 1.
        """
        settings = OutputSettings(
            json_output=self.settings.json_output,
            quiet=self.settings.quiet,
            verbose=self.settings.verbose,
        )
        output = format_result(result, settings=settings)
        if result.ok:
            click.echo(output)
            # In JSON mode, warnings are already in the serialized payload.
            if not settings.json_output:
                for warning in result.warnings:
                    click.echo(f"WARNING: {warning}", err=True)
        else:
            click.echo(output, err=True)
            raise SystemExit(1)
