"""
Command-line interface for Azure Identity Map

Expands provider-schema identity blocks into request payloads and flattens
API identity payloads back into identity blocks.
"""

import json
import sys
from pathlib import Path
from typing import Any

import click
import structlog
import yaml

from .config_manager import create_config_from_env, setup_logging
from .converter import (
    expand_system_or_single_user_assigned_map,
    expand_system_or_single_user_assigned_map_from_model,
    flatten_system_or_single_user_assigned_map,
    flatten_system_or_single_user_assigned_map_to_model,
)
from .encoder import deserialize_identity, serialize_identity
from .exceptions import IdentityMapError
from .logging_config import configure_logging

logger = structlog.get_logger(__name__)


def _load_document(path: Path) -> Any:
    """Load a YAML (or JSON, which is valid YAML) document."""
    try:
        with open(path) as f:
            return yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise click.ClickException(f"Invalid YAML/JSON in {path}: {e}") from e


def _echo_json(ctx: click.Context, data: Any) -> None:
    output = ctx.obj["config"].output
    click.echo(json.dumps(data, indent=output.json_indent, sort_keys=output.sort_keys))


def _fail(error: IdentityMapError) -> None:
    logger.error("identity_conversion_failed", **error.to_dict())
    click.echo(f"Error: {error}", err=True)
    sys.exit(1)


@click.group()
@click.option(
    "--log-level",
    default=None,
    help="Logging level (DEBUG, INFO, WARNING, ERROR). Defaults to LOG_LEVEL.",
)
@click.pass_context
def cli(ctx: click.Context, log_level: str) -> None:
    """Azure Identity Map - convert managed identity blocks and payloads."""
    ctx.ensure_object(dict)
    try:
        config = create_config_from_env(log_level)
    except ValueError as e:
        raise click.BadParameter(str(e)) from e

    setup_logging(config.logging)
    configure_logging(config.logging.get_log_level())
    ctx.obj["config"] = config


@cli.command()
@click.argument("path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--typed", is_flag=True, help="Treat the input as the typed model")
@click.pass_context
def expand(ctx: click.Context, path: Path, typed: bool) -> None:
    """Expand the identity block list in PATH and print the request payload."""
    document = _load_document(path)
    try:
        if typed:
            identity = expand_system_or_single_user_assigned_map_from_model(document)
        else:
            identity = expand_system_or_single_user_assigned_map(document)
    except IdentityMapError as e:
        _fail(e)
        return

    logger.info("identity_expanded", path=str(path), type=identity.type.value)
    _echo_json(ctx, serialize_identity(identity))


@cli.command()
@click.argument("path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--typed", is_flag=True, help="Emit the typed model")
@click.pass_context
def flatten(ctx: click.Context, path: Path, typed: bool) -> None:
    """Flatten the API identity payload in PATH and print the identity blocks."""
    document = _load_document(path)
    try:
        identity = deserialize_identity(document)
        if typed:
            blocks = [
                m.model_dump(mode="json")
                for m in flatten_system_or_single_user_assigned_map_to_model(identity)
            ]
        else:
            blocks = flatten_system_or_single_user_assigned_map(identity)
    except IdentityMapError as e:
        _fail(e)
        return

    logger.info("identity_flattened", path=str(path), blocks=len(blocks))
    _echo_json(ctx, blocks)


def main() -> None:
    cli(obj={})


if __name__ == "__main__":
    main()
