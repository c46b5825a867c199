"""
Renders a markdown file into a sanitized HTML fragment.
The fragment is printed to stdout, or written atomically to --output.
"""

from __future__ import annotations

import logging
from pathlib import Path

import click
from .config import ConfigError, build_config
from .exceptions import RenderFileError
from .filesystem import (
    collect_file_stat,
    enforce_file_size,
    get_max_file_size,
    normalize_filepath,
    write_output,
)
from .renderer import render_file

__all__ = ["cli"]


@click.command()
@click.version_option()
@click.option("--mobile/--no-mobile", "is_mobile", default=None, help="Use mobile presets")
@click.option(
    "--slideshow/--no-slideshow", "is_slideshow", default=None, help="Use slideshow presets"
)
@click.option("--host", "current_host", help="Host of the page showing the preview")
@click.option(
    "-o",
    "--output",
    type=click.Path(dir_okay=False, writable=True),
    help="Write the HTML fragment to this file instead of stdout",
)
@click.option("-v", "--verbose", is_flag=True, help="Log rendering details to stderr")
@click.argument("filepath", type=click.Path(exists=True, dir_okay=False))
def cli(
    filepath: str,
    is_mobile: bool | None = None,
    is_slideshow: bool | None = None,
    current_host: str | None = None,
    output: str | None = None,
    verbose: bool = False,
):
    """
    Entry point for rendering a Markdown file as an HTML fragment.

    Args:
        filepath: Path to the Markdown file to render.
        is_mobile: Override for the mobile presentation preset.
        is_slideshow: Override for the slideshow presentation preset.
        current_host: Host used to decide which links are external.
        output: Optional destination file for the fragment.
        verbose: Enable debug logging on stderr.

    Returns:
        None.

    Raises:
        click.BadParameter: If the input path is invalid or the configuration
            contains unsupported values.
        click.ClickException: If reading, size checks, or writing fail.

    Examples:
        md-preview notes.md --mobile --host example.com -o notes.html
    """
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    base_dir = Path.cwd().resolve()
    try:
        filepath = normalize_filepath(filepath, base_dir)
    except ValueError as error:
        raise click.BadParameter(str(error)) from error
    try:
        config = build_config(
            filepath.parent,
            is_mobile=is_mobile,
            is_slideshow=is_slideshow,
            current_host=current_host,
        )
    except ConfigError as error:
        raise click.BadParameter(str(error)) from error

    try:
        max_file_size = get_max_file_size(default=config.max_file_size)
    except ValueError as error:
        raise click.ClickException(str(error)) from error

    try:
        enforce_file_size(collect_file_stat(filepath), max_file_size, filepath)
    except IOError as error:
        raise click.ClickException(str(error)) from error

    try:
        html = render_file(filepath, config)
    except RenderFileError as error:
        raise click.ClickException(str(error)) from error

    # Writes to file
    if output is not None:
        try:
            write_output(Path(output).expanduser().absolute(), html)
        except IOError as error:
            raise click.ClickException(str(error)) from error
    # Prints to stdout
    else:
        click.echo(html)


if __name__ == "__main__":
    cli()
