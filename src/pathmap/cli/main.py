"""
Main CLI entry point for pathmap.

Provides the command-line interface using Click. Every command works on a
YAML or JSON document file; the format is chosen by file suffix.
"""

import contextlib as _contextlib
import json as _json
import logging as _logging
import os as _os
import pathlib as _pathlib
import sys as _sys
import typing as _typing

import click as _click
import pydantic as _pydantic
import yaml as _yaml

import pathmap
import pathmap.accessor as accessor
import pathmap.config as config
import pathmap.documents as documents
import pathmap.errors as errors

_logger = _logging.getLogger(__name__)

# Custom Click context settings for better help formatting
CONTEXT_SETTINGS: dict[str, _typing.Any] = {
    "help_option_names": ["-h", "--help"],
    "max_content_width": 100,
}

_DOCUMENT = _click.Path(exists=True, dir_okay=False, path_type=_pathlib.Path)


@_contextlib.contextmanager
def _cli_errors() -> _typing.Iterator[None]:
    """Report pathmap errors as clean CLI failures (exit code 1)."""
    try:
        yield
    except errors.PathmapError as e:
        raise _click.ClickException(str(e)) from None


def _configure_logging(level: str) -> None:
    """Send pathmap log records to stderr at the given level."""
    _logging.basicConfig(
        level=_logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=_sys.stderr,
    )
    _logging.getLogger("pathmap").setLevel(level.upper())


def _should_use_color(cli_flag: bool | None, settings: config.Settings) -> tuple[bool, bool]:
    """Determine whether to use color output.

    Priority:
    1. CLI flag (--color / --no-color) if specified
    2. output.color setting (PATHMAP_OUTPUT__COLOR)
    3. NO_COLOR env var (if set, disable color) - standard convention
    4. Auto-detect: color if stdout is a TTY

    Returns:
        Tuple of (color_enabled, force_color).
        force_color is True when color was explicitly requested (not auto-detected).
    """
    if cli_flag is not None:
        return (cli_flag, cli_flag)

    if settings.output.color is not None:
        return (settings.output.color, settings.output.color)

    if _os.environ.get("NO_COLOR") is not None:
        return (False, False)

    return (_sys.stdout.isatty(), False)


def _print_yaml(yaml_text: str, *, color: bool = True, force_color: bool = False) -> None:
    """Print YAML text, optionally with syntax highlighting."""
    if color:
        import rich.console as _rich_console
        import rich.syntax as _rich_syntax

        # force_terminal keeps color when piped after an explicit --color
        console = _rich_console.Console(
            force_terminal=force_color,
            no_color=False if force_color else None,
            color_system="truecolor" if force_color else "auto",
        )
        syntax = _rich_syntax.Syntax(
            yaml_text.rstrip("\n"),
            "yaml",
            theme="monokai",
            background_color="default",
        )
        console.print(syntax)
        return

    _click.echo(yaml_text, nl=False)


def _emit(ctx: _click.Context, value: _typing.Any, as_json: bool) -> None:
    """Print a value in the configured document format."""
    settings: config.Settings = ctx.obj["settings"]
    fmt = "json" if as_json else settings.output.format

    if not isinstance(value, (dict, list, tuple)):
        # Leaves print bare in YAML mode, as JSON scalars otherwise
        if isinstance(value, str) and fmt == "yaml":
            _click.echo(value)
        else:
            _click.echo(_json.dumps(value, default=str))
        return

    text = documents.dump_document(value, fmt)
    if fmt == "json":
        _click.echo(text, nl=False)
        return
    color, force_color = ctx.obj["color"]
    _print_yaml(text, color=color, force_color=force_color)


def _parse_value(raw: str, as_string: bool) -> _typing.Any:
    """Parse a command-line value as YAML, falling back to the raw string."""
    if as_string:
        return raw
    try:
        return documents.parse_document(raw, "yaml")
    except _yaml.YAMLError:
        _logger.debug("Value %r is not valid YAML, using it as a string", raw)
        return raw


def _load(path: _pathlib.Path) -> _typing.Any:
    with _cli_errors():
        return documents.load_document(path)


@_click.group(context_settings=CONTEXT_SETTINGS)
@_click.version_option(pathmap.__version__, "-v", "--version", prog_name="pathmap")
@_click.option(
    "-d",
    "--delimiter",
    type=str,
    default=None,
    help="Path segment separator (default: '.' or PATHMAP_PATHS__DELIMITER)",
)
@_click.option(
    "--log-level",
    type=_click.Choice(["debug", "info", "warning", "error"]),
    default=None,
    help="Log level (default: warning or PATHMAP_LOGGING__LEVEL)",
)
@_click.option(
    "--color/--no-color",
    "use_color",
    default=None,
    help="Enable/disable syntax highlighting (default: auto-detect TTY)",
)
@_click.pass_context
def cli(
    ctx: _click.Context,
    delimiter: str | None,
    log_level: str | None,
    use_color: bool | None,
) -> None:
    """
    pathmap - read and write nested YAML/JSON documents by path.

    \b
    Examples:
        pathmap get config.yaml server.port
        pathmap set config.yaml server.port 8080 --write
        pathmap unset config.yaml server.debug --write
        pathmap exists config.yaml server.host && echo yes
        pathmap merge defaults.yaml local.yaml -o merged.yaml
        pathmap -d / get config.yaml 'hosts/example.com/port'
    """
    try:
        settings = config.Settings()
    except (errors.PathmapError, _pydantic.ValidationError) as e:
        raise _click.ClickException(str(e)) from None

    _configure_logging(log_level or settings.logging.level)

    try:
        path_accessor = accessor.PathAccessor(
            delimiter if delimiter is not None else settings.paths.delimiter
        )
    except errors.InvalidPathError as e:
        raise _click.BadParameter(str(e), param_hint="'--delimiter'") from None

    ctx.ensure_object(dict)
    ctx.obj["settings"] = settings
    ctx.obj["accessor"] = path_accessor
    ctx.obj["color"] = _should_use_color(use_color, settings)


@cli.command(name="get")
@_click.argument("file", type=_DOCUMENT)
@_click.argument("path")
@_click.option("--default", "default", type=str, default=None, help="Value printed when missing")
@_click.option("--strict", is_flag=True, help="Fail when the path does not exist")
@_click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@_click.pass_context
def get_cmd(
    ctx: _click.Context,
    file: _pathlib.Path,
    path: str,
    default: str | None,
    strict: bool,
    as_json: bool,
) -> None:
    """Print the value at PATH in FILE."""
    path_accessor: accessor.PathAccessor = ctx.obj["accessor"]
    data = _load(file)
    fallback = _parse_value(default, False) if default is not None else None
    with _cli_errors():
        value = path_accessor.get(data, path, fallback, raise_on_missing=strict)
    _emit(ctx, value, as_json)


@cli.command(name="set")
@_click.argument("file", type=_DOCUMENT)
@_click.argument("path")
@_click.argument("value")
@_click.option("--string", "as_string", is_flag=True, help="Store VALUE as text, not YAML")
@_click.option("-w", "--write", is_flag=True, help="Write the result back to FILE")
@_click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@_click.pass_context
def set_cmd(
    ctx: _click.Context,
    file: _pathlib.Path,
    path: str,
    value: str,
    as_string: bool,
    write: bool,
    as_json: bool,
) -> None:
    """Store VALUE at PATH in FILE.

    VALUE is parsed as YAML, so 42 is a number and '[a, b]' a list.
    Without --write the updated document is printed.
    """
    path_accessor: accessor.PathAccessor = ctx.obj["accessor"]
    data = _load(file)
    with _cli_errors():
        result = path_accessor.set(data, path, _parse_value(value, as_string))
        if write:
            documents.write_document(file, result)
            return
    _emit(ctx, result, as_json)


@cli.command(name="unset")
@_click.argument("file", type=_DOCUMENT)
@_click.argument("path")
@_click.option("-w", "--write", is_flag=True, help="Write the result back to FILE")
@_click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@_click.pass_context
def unset_cmd(
    ctx: _click.Context,
    file: _pathlib.Path,
    path: str,
    write: bool,
    as_json: bool,
) -> None:
    """Remove PATH from FILE. A missing path is not an error."""
    path_accessor: accessor.PathAccessor = ctx.obj["accessor"]
    data = _load(file)
    with _cli_errors():
        result = path_accessor.unset(data, path)
        if write:
            documents.write_document(file, result)
            return
    _emit(ctx, result, as_json)


@cli.command(name="exists")
@_click.argument("file", type=_DOCUMENT)
@_click.argument("path")
@_click.pass_context
def exists_cmd(ctx: _click.Context, file: _pathlib.Path, path: str) -> None:
    """Exit 0 if PATH exists in FILE (even when null), 1 otherwise."""
    path_accessor: accessor.PathAccessor = ctx.obj["accessor"]
    found = path_accessor.exists(_load(file), path)
    _click.echo("true" if found else "false")
    ctx.exit(0 if found else 1)


@cli.command(name="isset")
@_click.argument("file", type=_DOCUMENT)
@_click.argument("path")
@_click.pass_context
def isset_cmd(ctx: _click.Context, file: _pathlib.Path, path: str) -> None:
    """Exit 0 if PATH exists in FILE and is not null, 1 otherwise."""
    path_accessor: accessor.PathAccessor = ctx.obj["accessor"]
    found = path_accessor.isset(_load(file), path)
    _click.echo("true" if found else "false")
    ctx.exit(0 if found else 1)


@cli.command(name="merge")
@_click.argument("files", nargs=-1, required=True, type=_DOCUMENT)
@_click.option(
    "-o",
    "--output",
    type=_click.Path(dir_okay=False, path_type=_pathlib.Path),
    default=None,
    help="Write the merged document here instead of printing it",
)
@_click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@_click.pass_context
def merge_cmd(
    ctx: _click.Context,
    files: tuple[_pathlib.Path, ...],
    output: _pathlib.Path | None,
    as_json: bool,
) -> None:
    """Deep merge FILES in order; later files win for scalar values."""
    with _cli_errors():
        result = documents.load_documents(*files)
        if output is not None:
            documents.write_document(output, result)
            return
    _emit(ctx, result, as_json)


@cli.group(name="config")
def config_cmd() -> None:
    """Configuration commands."""
    pass


@config_cmd.command(name="show")
@_click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@_click.pass_context
def config_show(ctx: _click.Context, as_json: bool) -> None:
    """Show effective configuration from all sources."""
    settings: config.Settings = ctx.obj["settings"]
    _emit(ctx, settings.model_dump(mode="json"), as_json)


def main() -> None:
    """Console script entry point."""
    cli()
