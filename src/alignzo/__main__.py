"""CLI entry point for alignzo."""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import TYPE_CHECKING

import click

from alignzo import __version__
from alignzo.config import AlignzoConfig
from alignzo.core.api import KanbanApiClient
from alignzo.core.catalog import CatalogLoader
from alignzo.core.errors import ApiError
from alignzo.core.models.enums import NotificationSeverity
from alignzo.debug_log import export_logs_to_file, setup_debug_logging
from alignzo.paths import get_config_path, get_debug_log_path

if TYPE_CHECKING:
    from alignzo.core.catalog import CatalogLoadResult
    from alignzo.core.models.enums import SubmitOutcome

_SEVERITY_COLORS = {
    NotificationSeverity.INFORMATION: "cyan",
    NotificationSeverity.SUCCESS: "green",
    NotificationSeverity.WARNING: "yellow",
    NotificationSeverity.ERROR: "red",
}


class ClickNotifier:
    """Prints core notifications to stderr."""

    def notify(self, kind: NotificationSeverity, message: str) -> None:
        click.secho(message, fg=_SEVERITY_COLORS[kind], err=True)


def _load_config(ctx: click.Context) -> AlignzoConfig:
    config_path: Path | None = ctx.obj.get("config_path") if ctx.obj else None
    try:
        return AlignzoConfig.load(config_path)
    except ValueError as exc:
        raise click.ClickException(f"Invalid config: {exc}") from exc


@click.group(invoke_without_command=True)
@click.option("--version", is_flag=True, help="Show version and exit")
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    envvar="ALIGNZO_CONFIG",
    help="Path to config.toml",
)
@click.pass_context
def cli(ctx: click.Context, version: bool, config_path: Path | None) -> None:
    """Task form tooling for the alignzo kanban board."""
    if version:
        click.echo(f"alignzo {__version__}")
        ctx.exit(0)

    ctx.ensure_object(dict)
    ctx.obj["config_path"] = config_path

    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


async def _fetch_catalog(config: AlignzoConfig, project_id: str) -> CatalogLoadResult:
    async with KanbanApiClient.from_config(config.api) as client:
        return await CatalogLoader(client, ClickNotifier()).load(project_id)


@cli.command()
@click.argument("project_id")
@click.pass_context
def categories(ctx: click.Context, project_id: str) -> None:
    """Show the categories and options available to PROJECT_ID."""
    config = _load_config(ctx)
    result = asyncio.run(_fetch_catalog(config, project_id))

    if result.error is not None:
        click.secho(str(result.error), fg="red", err=True)
        ctx.exit(1)

    if result.empty:
        click.secho("No categories found.", fg="yellow")
        return

    click.echo()
    for category in result.catalog.categories:
        click.echo(f"  {click.style(category.name, bold=True)} (id: {category.id})")
        for i, option in enumerate(category.options):
            prefix = "└──" if i == len(category.options) - 1 else "├──"
            click.echo(f"  {prefix} {option.name} (id: {option.id})")
        click.echo()


async def _run_form(
    config: AlignzoConfig,
    *,
    project_id: str,
    task_id: str | None = None,
    column_id: str | None = None,
) -> SubmitOutcome | None:
    from alignzo.ui.app import AlignzoApp

    async with KanbanApiClient.from_config(config.api) as client:
        task = None
        if task_id is not None:
            task = await client.get_task(project_id, task_id, config.api.team_id)
            if task is None:
                raise click.ClickException(f"Task {task_id} not found in project {project_id}")

        app = AlignzoApp(
            client, project_id=project_id, task=task, column_id=column_id, config=config
        )
        await app.run_async()
        return app.return_value


def _open_form(ctx: click.Context, export_log: Path | None, **kwargs: str | None) -> None:
    config = _load_config(ctx)
    setup_debug_logging()
    try:
        outcome = asyncio.run(_run_form(config, **kwargs))  # type: ignore[arg-type]
    except ApiError as exc:
        raise click.ClickException(str(exc)) from exc
    finally:
        if export_log is not None:
            count = export_logs_to_file(export_log)
            click.echo(f"Exported {count} log entries to {export_log}", err=True)

    if outcome is None:
        click.secho("Cancelled.", fg="yellow")
    else:
        click.secho(f"Task form closed: {outcome.value}", fg="green")


_export_log_option = click.option(
    "--export-log",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Write the session's debug log to this file on exit",
)


@cli.command(name="create-task")
@click.option("--project-id", required=True, help="Project the task belongs to")
@click.option("--column-id", default=None, help="Board column to create the task in")
@_export_log_option
@click.pass_context
def create_task(
    ctx: click.Context, project_id: str, column_id: str | None, export_log: Path | None
) -> None:
    """Open the new-task form."""
    _open_form(ctx, export_log, project_id=project_id, column_id=column_id)


@cli.command(name="edit-task")
@click.argument("task_id")
@click.option("--project-id", required=True, help="Project the task belongs to")
@_export_log_option
@click.pass_context
def edit_task(ctx: click.Context, task_id: str, project_id: str, export_log: Path | None) -> None:
    """Open the edit form for TASK_ID."""
    _open_form(ctx, export_log, project_id=project_id, task_id=task_id)


@cli.command(name="config")
@click.option("--init", "init_file", is_flag=True, help="Write a default config file")
@click.pass_context
def config_cmd(ctx: click.Context, init_file: bool) -> None:
    """Show the config file location and effective settings."""
    path: Path = (ctx.obj or {}).get("config_path") or get_config_path()

    if init_file:
        if path.exists():
            raise click.ClickException(f"Config already exists: {path}")
        asyncio.run(AlignzoConfig().save(path))
        click.secho(f"Wrote default config to {path}", fg="green")
        return

    config = _load_config(ctx)
    click.echo(f"Config file: {path}{'' if path.exists() else ' (not found, using defaults)'}")
    click.echo(f"Debug log export: {get_debug_log_path()}")
    click.echo()
    for section, values in config.model_dump().items():
        click.secho(f"[{section}]", bold=True)
        for key, value in values.items():
            click.echo(f"  {key} = {value!r}")


def main() -> None:
    cli()


if __name__ == "__main__":
    main()
