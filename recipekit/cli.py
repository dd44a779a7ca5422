"""
CLI interface for recipekit: hash, compare, render and share recipe files.
"""
import functools
import logging
import os
import sys
from pathlib import Path
from typing import Optional, Union

import click
from pydantic import ValidationError

from recipekit.config import settings
from recipekit.engine import unit_converter
from recipekit.engine.hashing import similarity
from recipekit.errors import RecipeKitError, RecipeValidationError
from recipekit.models.recipe import Recipe

logger = logging.getLogger(__name__)


def load_recipe(path: Union[str, Path]) -> Recipe:
    """Load a recipe from a JSON file."""
    text = Path(path).read_text(encoding="utf-8")
    try:
        return Recipe.from_json(text)
    except ValidationError as e:
        raise RecipeValidationError(
            f"Invalid recipe file {path}: {e.error_count()} validation error(s)"
        ) from e


def _operand(value: str) -> Union[Recipe, str]:
    """A compare operand is a recipe file if one exists at that path, else a hash."""
    if os.path.isfile(value):
        return load_recipe(value)
    return value


def handle_errors(func):
    """Print RecipeKitErrors as structured JSON on stderr and exit with status 1."""
    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except RecipeKitError as e:
            logger.debug(f"Command failed: {e.error_code.value}")
            click.echo(e.to_response().model_dump_json(), err=True)
            sys.exit(1)
    return wrapper


@click.group()
@click.option('--log-level', default=None, help='Logging level (defaults to RECIPEKIT_LOG_LEVEL)')
@click.version_option(settings.app_version, prog_name=settings.app_name)
def cli(log_level: Optional[str]):
    """recipekit - recipes as structured data"""
    level_name = (log_level or settings.log_level).upper()
    logging.basicConfig(
        level=getattr(logging, level_name, logging.INFO),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )


@cli.command(name='hash')
@click.argument('recipe_file', type=click.Path(exists=True, dir_okay=False))
@click.option('--buckets', type=int, default=None, help='Number of histogram buckets')
@handle_errors
def hash_command(recipe_file: str, buckets: Optional[int]):
    """Print the similarity hash of a recipe file."""
    recipe = load_recipe(recipe_file)
    click.echo(recipe.cook(buckets))


@cli.command()
@click.argument('first')
@click.argument('second')
@click.option('--buckets', type=int, default=None, help='Number of histogram buckets')
@handle_errors
def compare(first: str, second: str, buckets: Optional[int]):
    """Compare two recipes. Each argument is a recipe JSON file or a hash."""
    score = similarity(_operand(first), _operand(second), num_buckets=buckets)
    click.echo(f"{score:.4f}")


@cli.command()
@click.argument('recipe_file', type=click.Path(exists=True, dir_okay=False))
@click.option('--format', 'output_format', type=click.Choice(['text', 'markdown']),
              default='text', help='Output format')
@handle_errors
def render(recipe_file: str, output_format: str):
    """Render a recipe file as text or markdown."""
    recipe = load_recipe(recipe_file)
    if output_format == 'markdown':
        click.echo(recipe.to_markdown(), nl=False)
    else:
        click.echo(recipe.to_text(), nl=False)


@cli.command()
@click.argument('recipe_file', type=click.Path(exists=True, dir_okay=False))
@handle_errors
def qr(recipe_file: str):
    """Draw a recipe file as a QR code and print its payload."""
    recipe = load_recipe(recipe_file)
    payload = recipe.to_qr_code()
    click.echo(payload)


@cli.command()
@click.argument('value', type=float)
@click.argument('from_unit')
@click.argument('to_unit')
@handle_errors
def convert(value: float, from_unit: str, to_unit: str):
    """Convert VALUE from FROM_UNIT to TO_UNIT."""
    result = unit_converter.convert(value, from_unit, to_unit)
    click.echo(f"{result:.2f} {to_unit}")


if __name__ == '__main__':
    cli()
