"""Click CLI for inspecting and running the Telegram node."""

from __future__ import annotations

import asyncio
import json
import logging
from pathlib import Path

import click
import httpx
from pydantic import ValidationError

from src.models import ExecutionRecord
from src.node.mapper import UnknownOperationError, UnknownResourceError, build_request
from src.node.markup import ReplyMarkupError
from src.node.node import TelegramNode
from src.node.parameters import ParameterNotFoundError, resolve_parameters
from src.schema.display import iter_visible, visible_options
from src.schema.issues import collect_issues
from src.schema.loader import SchemaConfigError, load_description, load_description_from_file
from src.schema.models import NodeDescription, PropertyType
from src.telegram.client import ClientConfigError, TelegramApiClient, TelegramApiError
from src.telegram.credentials import TOKEN_ENV_VAR, CredentialsError, StaticCredentialStore

_NODE_ERRORS = (
    UnknownResourceError,
    UnknownOperationError,
    ParameterNotFoundError,
    ReplyMarkupError,
    CredentialsError,
    TelegramApiError,
    ClientConfigError,
    httpx.HTTPError,
)


def _load_records(records_path: str) -> list[ExecutionRecord]:
    try:
        raw = json.loads(Path(records_path).read_text())
    except json.JSONDecodeError as exc:
        raise click.ClickException(f"Records file is not valid JSON: {records_path}") from exc
    if not isinstance(raw, list):
        raise click.ClickException("Records file must contain a JSON array")
    try:
        return [ExecutionRecord.model_validate(r) for r in raw]
    except ValidationError as exc:
        raise click.ClickException(f"Invalid record: {exc}") from exc


def _parse_params(params: tuple[str, ...]) -> dict[str, object]:
    values: dict[str, object] = {}
    for item in params:
        key, sep, value = item.partition("=")
        if not sep:
            raise click.BadParameter(f"expected key=value, got {item!r}", param_hint="--param")
        try:
            values[key] = json.loads(value)
        except json.JSONDecodeError:
            values[key] = value
    return values


@click.group()
@click.option("--schema", default=None, help="Path to the node description JSON.")
@click.option(
    "--log-level",
    default="WARNING",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    help="Logging level.",
)
@click.pass_context
def cli(ctx: click.Context, schema: str | None, log_level: str) -> None:
    """Telegram node CLI."""
    logging.basicConfig(
        level=log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    # httpx logs full request URLs, which carry the bot token
    logging.getLogger("httpx").setLevel(logging.WARNING)
    ctx.ensure_object(dict)
    try:
        ctx.obj["description"] = (
            load_description_from_file(schema) if schema else load_description()
        )
    except SchemaConfigError as exc:
        raise click.ClickException(str(exc)) from exc


@cli.command()
@click.pass_context
def describe(ctx: click.Context) -> None:
    """Print the node description."""
    description: NodeDescription = ctx.obj["description"]
    click.echo(description.model_dump_json(by_alias=True, exclude_none=True, indent=2))


@cli.command()
@click.option("--resource", default=None, help="Selected resource.")
@click.option("--operation", default=None, help="Selected operation.")
@click.option("--param", "params", multiple=True, help="Extra parameter as key=value.")
@click.pass_context
def fields(
    ctx: click.Context, resource: str | None, operation: str | None, params: tuple[str, ...],
) -> None:
    """List the fields shown for a resource/operation selection."""
    description: NodeDescription = ctx.obj["description"]
    values = _parse_params(params)
    if resource is not None:
        values["resource"] = resource
    if operation is not None:
        values["operation"] = operation

    resolved = {prop.name: value for prop, value in iter_visible(description, values)}
    output = []
    for prop, value in iter_visible(description, values):
        entry: dict[str, object] = {
            "name": prop.name,
            "displayName": prop.display_name,
            "type": prop.type.value,
            "required": prop.required,
            "value": value,
        }
        if prop.type == PropertyType.OPTIONS:
            entry["choices"] = prop.choices()
        if prop.type == PropertyType.COLLECTION:
            entry["fields"] = [f.name for f in visible_options(prop, resolved)]
        output.append(entry)
    click.echo(json.dumps(output, indent=2))


@cli.command()
@click.argument("records_path", type=click.Path(exists=True, dir_okay=False))
@click.pass_context
def check(ctx: click.Context, records_path: str) -> None:
    """Report parameter issues for each record; exits 1 if any are found."""
    description: NodeDescription = ctx.obj["description"]
    records = _load_records(records_path)
    output = [
        {"index": index, "parameter": issue.parameter, "message": issue.message}
        for index, record in enumerate(records)
        for issue in collect_issues(description, record.parameters)
    ]
    click.echo(json.dumps(output, indent=2))
    if output:
        ctx.exit(1)


@cli.command()
@click.argument("records_path", type=click.Path(exists=True, dir_okay=False))
@click.pass_context
def build(ctx: click.Context, records_path: str) -> None:
    """Print the API call each record maps to, without sending anything."""
    description: NodeDescription = ctx.obj["description"]
    records = _load_records(records_path)
    try:
        requests = [
            build_request(resolve_parameters(description, record.parameters))
            for record in records
        ]
    except _NODE_ERRORS as exc:
        raise click.ClickException(str(exc)) from exc
    click.echo(json.dumps([r.model_dump() for r in requests], indent=2))


@cli.command()
@click.argument("records_path", type=click.Path(exists=True, dir_okay=False))
@click.option(
    "--token", envvar=TOKEN_ENV_VAR, required=True,
    help=f"Bot token (defaults to ${TOKEN_ENV_VAR}).",
)
@click.pass_context
def run(ctx: click.Context, records_path: str, token: str) -> None:
    """Execute the node over a records file and print the output items."""
    description: NodeDescription = ctx.obj["description"]
    records = _load_records(records_path)
    try:
        client = TelegramApiClient.from_env(credentials=StaticCredentialStore(token))
        node = TelegramNode(client, description=description)
        items = asyncio.run(node.execute(records))
    except _NODE_ERRORS as exc:
        raise click.ClickException(str(exc)) from exc
    click.echo(json.dumps([i.model_dump(by_alias=True) for i in items], indent=2))
