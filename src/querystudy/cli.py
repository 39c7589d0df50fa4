"""Root CLI group for querystudy with global flags and command registration."""

from __future__ import annotations

import click

from querystudy import __version__
from querystudy.commands import register_commands
from querystudy.commands._context import AppContext
from querystudy.config.settings import QueryStudySettings


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="querystudy")
@click.option("--json", "json_output", is_flag=True, help="Structured JSON output.")
@click.option("-q", "--quiet", is_flag=True, help="Minimal output.")
@click.option("-v", "--verbose", is_flag=True, help="Detailed output with debug logging.")
@click.option("--log-json", is_flag=True, help="Structured JSON log output to stderr.")
@click.option("-c", "--config", "config_path", default=None, help="Override config file path.")
@click.option("--database-url", default=None, help="SQLAlchemy URL; overrides [database] url.")
@click.pass_context
def cli(
    ctx: click.Context,
    json_output: bool,
    quiet: bool,
    verbose: bool,
    log_json: bool,
    config_path: str | None,
    database_url: str | None,
) -> None:
    """querystudy: query construction on the SQLAlchemy ORM."""
    ctx.ensure_object(dict)
    settings = QueryStudySettings.from_cli(
        config_path=config_path,
        json_output=json_output,
        quiet=quiet,
        verbose=verbose,
        log_json=log_json,
        database_url=database_url,
    )
    app = AppContext(settings)
    ctx.obj = app
    ctx.call_on_close(app.close)
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


register_commands(cli)
