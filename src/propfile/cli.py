"""propfile CLI — inspect and edit .properties files.

Commands:
    propfile init                      create propfile.toml
    propfile get FILE KEY              print a value (${NAME} expanded)
    propfile set FILE KEY VALUE        add or replace a value
    propfile unset FILE KEY            remove a value
    propfile list FILE                 print all pairs, sorted
    propfile format FILE               rewrite a file in canonical form
"""

from __future__ import annotations

import logging
from pathlib import Path

import click

from propfile.config import PropfileConfig, init_config, load_config
from propfile.errors import PropertiesError, PropertyNotFoundError
from propfile.properties import Properties
from propfile.resolvers import environment_resolver

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _load_cfg() -> PropfileConfig:
    try:
        return load_config()
    except Exception as exc:
        raise click.ClickException(str(exc)) from exc


def _read(path: Path, cfg: PropfileConfig, *, missing_ok: bool = False) -> Properties:
    props = Properties()
    if missing_ok and not path.exists():
        return props
    try:
        props.load_path(path, encoding=cfg.encoding)
    except OSError as exc:
        raise click.ClickException(f"cannot read {path}: {exc.strerror or exc}") from exc
    except UnicodeDecodeError as exc:
        raise click.ClickException(f"cannot decode {path} as {cfg.encoding}") from exc
    return props


def _write(props: Properties, path: Path, cfg: PropfileConfig) -> None:
    try:
        props.store_path(path, encoding=cfg.encoding, line_separator=cfg.line_separator)
    except OSError as exc:
        raise click.ClickException(f"cannot write {path}: {exc.strerror or exc}") from exc


# ---------------------------------------------------------------------------
# Root group
# ---------------------------------------------------------------------------


@click.group()
@click.version_option(package_name="propfile")
@click.option("-v", "--verbose", is_flag=True, help="Log load/store activity to stderr")
def cli(verbose: bool) -> None:
    """propfile — read and write .properties files."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(asctime)s %(levelname)s %(message)s")


@cli.command()
@click.option("--dir", "root", default=".", show_default=True, help="Project root")
def init(root: str) -> None:
    """Create propfile.toml with default settings."""
    root_path = Path(root).resolve()
    try:
        config_path = init_config(root_path)
        click.echo(f"Created {config_path}")
    except FileExistsError:
        click.echo("propfile.toml already exists — skipping init")


# ---------------------------------------------------------------------------
# propfile get / list
# ---------------------------------------------------------------------------


@cli.command()
@click.argument("file", type=click.Path(path_type=Path, dir_okay=False))
@click.argument("key")
@click.option("--default", "default", default=None, help="Printed when KEY is missing")
@click.option("--raw", is_flag=True, help="Do not expand ${NAME} tokens")
def get(file: Path, key: str, default: str | None, raw: bool) -> None:
    """Print the value stored under KEY."""
    cfg = _load_cfg()
    props = _read(file, cfg)
    if cfg.resolve_env and not raw:
        props.add_resolver(environment_resolver, name="env")

    if default is not None:
        click.echo(props.get_or_default(key, default))
        return
    try:
        click.echo(props.get(key))
    except PropertyNotFoundError as exc:
        raise click.ClickException(str(exc)) from exc


@cli.command(name="list")
@click.argument("file", type=click.Path(path_type=Path, dir_okay=False))
@click.option("--resolve", is_flag=True, help="Expand ${NAME} tokens in values")
def list_cmd(file: Path, resolve: bool) -> None:
    """Print every KEY=VALUE pair in key order."""
    cfg = _load_cfg()
    props = _read(file, cfg)
    if resolve:
        props.add_resolver(environment_resolver, name="env")
    for key in props.keys():
        value = props.get(key) if resolve else props.get_or_default(key)
        click.echo(f"{key}={value}")


# ---------------------------------------------------------------------------
# propfile set / unset / format
# ---------------------------------------------------------------------------


@cli.command(name="set")
@click.argument("file", type=click.Path(path_type=Path, dir_okay=False))
@click.argument("key")
@click.argument("value")
def set_cmd(file: Path, key: str, value: str) -> None:
    """Store VALUE under KEY, creating FILE if needed."""
    cfg = _load_cfg()
    props = _read(file, cfg, missing_ok=True)
    try:
        old = props.put(key, value)
    except PropertiesError as exc:
        raise click.ClickException(str(exc)) from exc
    _write(props, file, cfg)
    if old:
        click.echo(f"{key}: {old} -> {value}")
    else:
        click.echo(f"{key}={value}")


@cli.command()
@click.argument("file", type=click.Path(path_type=Path, dir_okay=False, exists=True))
@click.argument("key")
def unset(file: Path, key: str) -> None:
    """Remove KEY from FILE."""
    cfg = _load_cfg()
    props = _read(file, cfg)
    if not props.contains(key):
        click.echo(f"{key} not set — nothing to do")
        return
    props.remove(key)
    _write(props, file, cfg)
    click.echo(f"Removed {key}")


@cli.command(name="format")
@click.argument("file", type=click.Path(path_type=Path, dir_okay=False, exists=True))
@click.option("-o", "--output", type=click.Path(path_type=Path, dir_okay=False), default=None,
              help="Write here instead of rewriting FILE")
def format_cmd(file: Path, output: Path | None) -> None:
    """Rewrite FILE with a fresh header, sorted keys, comments and continuations folded."""
    cfg = _load_cfg()
    props = _read(file, cfg)
    target = output or file
    _write(props, target, cfg)
    click.echo(f"Wrote {props.count()} pairs to {target}")


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------


def main() -> None:
    cli(standalone_mode=True)


if __name__ == "__main__":
    main()
