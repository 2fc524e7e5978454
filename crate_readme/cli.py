"""
Generates a README from the doc comments of a Rust crate.
The result is printed to stdout, or written to a file when an output is given.
"""

from __future__ import annotations

from pathlib import Path

import click
from .config import ConfigError, build_config
from .exceptions import (
    EntrypointNotFoundError,
    ManifestError,
    RenderError,
    TemplateNotFoundError,
)
from .filesystem import (
    max_file_size_from_env,
    read_text,
    resolve_entrypoint,
    resolve_template,
    write_output,
)
from .manifest import find_project_root, load_crate_info
from .renderer import generate_readme

__all__ = ["cli"]


@click.command()
@click.version_option(package_name="crate-readme")
@click.option(
    "-i",
    "--input",
    "input_path",
    help="File to read from. Defaults to 'src/lib.rs', 'src/main.rs', "
    "or the entrypoint declared in Cargo.toml.",
)
@click.option(
    "-o",
    "--output",
    "output_path",
    help="File to write to. If not provided, the README is printed to stdout.",
)
@click.option(
    "-t",
    "--template",
    "template_path",
    help="Template used to render the output. Defaults to 'README.tpl' when present.",
)
@click.option("--no-template", is_flag=True, help="Ignore the template file, including README.tpl.")
@click.option(
    "--no-title",
    is_flag=True,
    help="Do not prepend the '# crate-name' title. A template declaring "
    "'{{crate}}' takes precedence over the title.",
)
@click.option(
    "--append-license",
    is_flag=True,
    help="Append the license line. A template declaring '{{license}}' "
    "takes precedence over the license line.",
)
@click.option(
    "--no-indent-headings",
    is_flag=True,
    help="Do not add an extra level to headings found in doc comments.",
)
@click.option(
    "--project-dir",
    type=click.Path(exists=True, file_okay=False),
    help="Crate directory. Defaults to the nearest parent holding Cargo.toml.",
)
def cli(
    input_path: str | None = None,
    output_path: str | None = None,
    template_path: str | None = None,
    no_template: bool = False,
    no_title: bool = False,
    append_license: bool = False,
    no_indent_headings: bool = False,
    project_dir: str | None = None,
):
    """
    Entry point for generating a README from crate doc comments.

    Args:
        input_path: Source file to extract doc comments from.
        output_path: File to write the README to.
        template_path: Template to merge the README into.
        no_template: Ignore any template.
        no_title: Skip the crate name title.
        append_license: Add the license line.
        no_indent_headings: Keep doc-comment heading levels unchanged.
        project_dir: Crate directory overriding discovery.

    Returns:
        None.

    Raises:
        click.UsageError: If no Cargo project is found or options conflict.
        click.BadParameter: If configuration values are invalid.
        click.ClickException: If the manifest, the source, or the template
            cannot be used, or rendering fails.

    Examples:
        crate-readme --output README.md --append-license
    """
    if template_path is not None and no_template:
        raise click.UsageError("--template cannot be used with --no-template")

    start = Path(project_dir) if project_dir is not None else Path.cwd()
    project_root = find_project_root(start)
    if project_root is None:
        raise click.UsageError("This doesn't look like a Rust/Cargo project")

    try:
        config = build_config(
            project_root,
            input=input_path,
            output=output_path,
            template=template_path,
            no_template=True if no_template else None,
            add_title=False if no_title else None,
            add_license=True if append_license else None,
            indent_headings=False if no_indent_headings else None,
        )
    except ConfigError as error:
        raise click.BadParameter(str(error)) from error

    try:
        max_file_size = max_file_size_from_env(config.max_file_size)
    except ValueError as error:
        raise click.ClickException(str(error)) from error

    try:
        crate_info = load_crate_info(project_root)
        source_path = resolve_entrypoint(project_root, crate_info, config.input)
        template_file = resolve_template(project_root, config.template, config.no_template)
    except (ManifestError, EntrypointNotFoundError, TemplateNotFoundError) as error:
        raise click.ClickException(str(error)) from error

    try:
        source = read_text(source_path, max_file_size)
        template = None if template_file is None else read_text(template_file, max_file_size)
    except IOError as error:
        raise click.ClickException(str(error)) from error

    try:
        readme = generate_readme(
            source.split("\n"),
            template,
            crate_info,
            add_title=config.add_title,
            add_license=config.add_license,
            indent_headings=config.indent_headings,
        )
    except RenderError as error:
        raise click.ClickException(str(error)) from error

    if config.output is None:
        click.echo(readme)
        return

    try:
        write_output(
            project_root / config.output,
            readme,
            warn=lambda message: click.echo(message, err=True),
        )
    except IOError as error:
        raise click.ClickException(str(error)) from error


if __name__ == "__main__":
    cli()
