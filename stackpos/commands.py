"""CLI Commands
-------------

Command-line entry point shipped with the package. ``stk_stack`` reads an
element table, applies a stacking or fill position and writes the result:

    stk_stack bars.csv stacked.csv
    stk_stack bars.csv filled.parquet --fill --vjust 0.5
    stk_stack bars.csv stacked.json --spec position.yaml

Options given on the command line take precedence over the spec file.
Diagnostics are printed to stderr as ``category: message``; they never change
the exit code.
"""

__all__ = ["stk_stack"]

import logging

import click

from stackpos.io import read_elements, read_position_spec, write_elements
from stackpos.position import StackPosition
from stackpos.validation import PositionSpec

logger = logging.getLogger(__name__)


@click.command(name="stk_stack")
@click.argument("input_file", type=click.Path(exists=True, dir_okay=False))
@click.argument("output_file", type=click.Path(dir_okay=False))
@click.option("--spec", "spec_file", type=click.Path(exists=True, dir_okay=False), help="YAML/JSON position spec.")
@click.option("--fill/--stack", "fill", default=None, help="Normalise each stack to unit height.")
@click.option("--vjust", type=click.FloatRange(0.0, 1.0), default=None, help="0 = bottom, 0.5 = middle, 1 = top.")
@click.option("--var", type=click.Choice(["y", "ymax"]), default=None, help="Force the column to stack on.")
@click.option("--verbose", "-v", is_flag=True, help="Log progress to stderr.")
def stk_stack(
    input_file: str,
    output_file: str,
    spec_file: str | None,
    fill: bool | None,
    vjust: float | None,
    var: str | None,
    verbose: bool,
) -> None:
    """Stack the elements in INPUT_FILE and write them to OUTPUT_FILE."""

    if verbose:
        logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    spec = read_position_spec(spec_file) if spec_file else PositionSpec()
    overrides: dict[str, object] = {}
    if fill is not None:
        overrides["position"] = "fill" if fill else "stack"
    if vjust is not None:
        overrides["vjust"] = vjust
    if var is not None:
        overrides["var"] = var
    spec = PositionSpec.model_validate({**spec.model_dump(), **overrides})
    logger.info(f"Using {spec.position} position with vjust={spec.vjust}")

    position = StackPosition.from_spec(spec)
    df = read_elements(input_file)

    result = position.apply(df, emit_warnings=False)

    for d in result.diagnostics:
        click.echo(str(d), err=True)

    write_elements(result.data, output_file)
