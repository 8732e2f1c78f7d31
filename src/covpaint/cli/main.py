"""covpaint CLI - covpaint command."""

from pathlib import Path

import click

from covpaint import __version__
from covpaint.cli.inspect_lines import inspect_command
from covpaint.cli.render import render_command
from covpaint.cli.utils import to_click_exception
from covpaint.config.loader import load_config
from covpaint.core.errors import ConfigError
from covpaint.core.logging import configure_logging


@click.group()
@click.version_option(version=__version__, prog_name="covpaint")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
@click.option(
    "-c",
    "--config",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Config file (default: ./.covpaint.yaml)",
)
@click.pass_context
def cli(ctx: click.Context, verbose: bool, config_path: Path | None) -> None:
    """covpaint - Render source code rows annotated with test coverage."""
    ctx.ensure_object(dict)
    try:
        config = load_config(config_path=config_path)
    except ConfigError as e:
        raise to_click_exception(e) from e

    if verbose:
        config.logging.level = "DEBUG"
    configure_logging(config=config.logging)

    ctx.obj["verbose"] = verbose
    ctx.obj["config"] = config


cli.add_command(render_command, name="render")
cli.add_command(inspect_command, name="inspect")


if __name__ == "__main__":
    cli()
