"""Command-line interface for statusflow."""

import asyncio
import sys

import click
from pydantic import ValidationError

from .catalog.client import AdminApiClient
from .catalog.errors import CatalogLoadError
from .config import EditorConfig
from .graph.builder import build_model_from_document
from .graph.errors import WorkflowGraphError
from .log_config import setup_logging
from .output.csv_export import export_permissions_csv, transition_records
from .output.formatter import format_change_set, format_validation_result
from .reconcile.reconciler import reconcile
from .schema.errors import DocumentLoadError, DocumentValidationError
from .schema.loader import load_document
from .validators.runner import run_validators


def _load_model(path: str):
    """Load a document and build its model, exiting with code 2 on failure."""
    try:
        document = load_document(path)
        return build_model_from_document(document)
    except DocumentLoadError as e:
        click.echo(f"Error loading file: {e}", err=True)
        sys.exit(2)
    except DocumentValidationError as e:
        click.echo(f"Document validation error: {e}", err=True)
        for err in e.errors:
            click.echo(f"  - {err['loc']}: {err['msg']}", err=True)
        sys.exit(2)
    except WorkflowGraphError as e:
        click.echo(f"Cannot build workflow: {e}", err=True)
        sys.exit(2)


@click.group()
@click.version_option(package_name="statusflow")
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    envvar="STATUSFLOW_LOG_LEVEL",
    default="WARNING",
    help="Logging level",
)
def main(log_level: str):
    """statusflow: workflow definition tooling."""
    setup_logging(log_level)


@main.command()
@click.argument("document", type=click.Path(exists=True))
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["text", "json"]),
    default="text",
    help="Output format",
)
@click.option(
    "--strict",
    is_flag=True,
    default=False,
    help="Treat warnings as errors",
)
def validate(document: str, output_format: str, strict: bool):
    """Validate a workflow document.

    DOCUMENT is the path to a YAML workflow document.

    Exit codes:
      0 - Validation passed
      1 - Validation failed (errors found)
      2 - File or schema error
    """
    model = _load_model(document)
    result = run_validators(model.snapshot(), model.registry, model.catalog)

    click.echo(format_validation_result(result, output_format))  # type: ignore

    if result.has_errors:
        sys.exit(1)
    elif strict and result.has_warnings:
        sys.exit(1)
    else:
        sys.exit(0)


@main.command()
@click.argument("baseline", type=click.Path(exists=True))
@click.argument("current", type=click.Path(exists=True))
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["text", "json"]),
    default="text",
    help="Output format",
)
def diff(baseline: str, current: str, output_format: str):
    """Show the transition changes between two workflow documents.

    BASELINE is the workflow as stored on the server, CURRENT the edited one.
    Transitions without an id in CURRENT are new.

    Exit codes:
      0 - Change-set computed
      1 - Change-set has unresolved references
      2 - File or schema error
    """
    baseline_model = _load_model(baseline)
    current_model = _load_model(current)

    change_set = reconcile(
        baseline_model.snapshot(), current_model.snapshot(), current_model.catalog
    )
    click.echo(format_change_set(change_set, output_format))  # type: ignore

    sys.exit(0 if change_set.is_valid else 1)


@main.command("export-csv")
@click.argument("document", type=click.Path(exists=True))
@click.option("--item-type-set", default=None, help="Item type set name column value")
@click.option("--role", "roles", multiple=True, help="Role holding the executor permission")
@click.option("--bom", is_flag=True, default=False, help="Prefix a UTF-8 byte order mark")
def export_csv(document: str, item_type_set: str | None, roles: tuple[str, ...], bom: bool):
    """Export a workflow's transitions as executor-permission CSV rows.

    DOCUMENT is the path to a YAML workflow document.
    """
    model = _load_model(document)
    records = transition_records(model.snapshot(), item_type_set, roles)
    click.echo(export_permissions_csv(records, bom=bom, include_unassigned=True))


@main.command()
@click.option("--base-url", envvar="STATUSFLOW_API_BASE_URL", default=None, help="Admin API base URL")
@click.option("--token", envvar="STATUSFLOW_API_TOKEN", default=None, help="Admin API bearer token")
def catalog(base_url: str | None, token: str | None):
    """Print the status catalog and categories served by the admin API.

    Exit codes:
      0 - Success
      2 - Configuration or API error
    """
    overrides = {"api_base_url": base_url, "api_token": token}
    try:
        config = EditorConfig.model_validate(
            {**EditorConfig.from_env().model_dump(), **{k: v for k, v in overrides.items() if v}}
        )
    except ValidationError as e:
        click.echo(f"Configuration error: {e}", err=True)
        sys.exit(2)

    try:
        statuses, categories = asyncio.run(_fetch_reference_data(config))
    except CatalogLoadError as e:
        click.echo(f"API error: {e}", err=True)
        sys.exit(2)

    click.echo("CATEGORIES:")
    for category in categories:
        click.echo(f"  {category}")
    click.echo("")
    click.echo("STATUSES:")
    for status in statuses:
        click.echo(f"  {status.id}: {status.name}")
    sys.exit(0)


async def _fetch_reference_data(config: EditorConfig):
    async with AdminApiClient(
        config.api_base_url, config.api_token, config.request_timeout
    ) as client:
        statuses = await client.fetch_statuses()
        categories = await client.fetch_categories()
    return statuses, categories


if __name__ == "__main__":
    main()
