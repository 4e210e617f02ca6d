"""CLI for evaluating cached decision-tree models locally."""

import json
import logging
import sys
from pathlib import Path

import click

from . import __version__
from .core.config import get_settings
from .core.errors import LocalPredictError, ParseError
from .core.types import MissingBranchPolicy
from .evaluator import ModelEvaluator
from .registry import ModelRegistry

logger = logging.getLogger(__name__)


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def load_evaluator(model_file: Path, honor_missing: bool) -> ModelEvaluator:
    """Read a model document from disk and parse it."""
    settings = get_settings()
    policy = MissingBranchPolicy(
        enabled=honor_missing,
        operator_suffix=settings.missing_operator_suffix,
    )
    try:
        document = json.loads(model_file.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise ParseError(f"{model_file} is not valid JSON: {e}") from e
    return ModelEvaluator(document, policy=policy)


def fail(error: LocalPredictError) -> None:
    click.echo(f"ERROR: {error.message}", err=True)
    sys.exit(1)


@click.group()
@click.version_option(version=__version__, prog_name="local-predict")
@click.option("--log-level", default=None, help="Logging level (default: from settings)")
def cli(log_level: str | None):
    """Local predictions from decision-tree model documents."""
    configure_logging(log_level or get_settings().log_level)


@cli.command()
@click.argument("model_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.argument("args")
@click.option("--by-name", is_flag=True, help="ARGS are keyed by field name instead of field id")
@click.option(
    "--missing-branches/--no-missing-branches",
    default=None,
    help="Let missing branches match absent values (default: from settings)",
)
def predict(model_file: Path, args: str, by_name: bool, missing_branches: bool | None):
    """Predict the objective field of MODEL_FILE for the JSON object ARGS."""
    if missing_branches is None:
        missing_branches = get_settings().honor_missing_branches
    try:
        evaluator = load_evaluator(model_file, missing_branches)
        result = evaluator.predict(args, by_name=by_name)
    except LocalPredictError as e:
        fail(e)
        return

    click.echo(json.dumps(result.model_dump(), default=str))


@cli.command()
@click.argument("model_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
def fields(model_file: Path):
    """List the fields of MODEL_FILE."""
    try:
        evaluator = load_evaluator(model_file, get_settings().honor_missing_branches)
    except LocalPredictError as e:
        fail(e)
        return

    for field_id, field in evaluator.catalog.items():
        marker = " (objective)" if field_id == evaluator.objective_field else ""
        click.echo(f"{field_id}  {field.optype.value:<12} {field.name}{marker}")


@cli.command()
@click.argument("model_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
def describe(model_file: Path):
    """Summarize the tree of MODEL_FILE."""
    try:
        evaluator = load_evaluator(model_file, get_settings().honor_missing_branches)
    except LocalPredictError as e:
        fail(e)
        return

    click.echo(f"Objective field: {evaluator.objective_field} ({evaluator.objective_name})")
    click.echo(f"Fields: {len(evaluator.catalog)}")
    click.echo(f"Nodes: {evaluator.root.node_count()}")
    click.echo(f"Depth: {evaluator.root.depth()}")


@cli.command()
@click.option(
    "--storage",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Model storage directory (default: from settings)",
)
def models(storage: Path | None):
    """List model documents cached in storage."""
    registry = ModelRegistry(storage_path=storage)
    stored = registry.stored_models()
    if not stored:
        click.echo(f"No models in {registry.storage_path}")
        return
    for resource_id in stored:
        click.echo(resource_id)


if __name__ == "__main__":
    cli()
