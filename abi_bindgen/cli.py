"""
abi_bindgen.cli
===============

`abi-bindgen` — generate selector-suffixed Python bindings from ABI JSON.

Examples
--------
    $ abi-bindgen generate --input abis/erc721.json --output bindings/erc721.py
    $ abi-bindgen batch abis/*.json --out-dir bindings --workers 4
    $ abi-bindgen selector "transfer(address,uint256)"
    $ abi-bindgen inspect --input abis/erc721.json

Configuration
-------------
- Log level    : `--log-level` or env `ABI_BINDGEN_LOG_LEVEL` (default: WARNING)
- Log format   : `--log-format` or env `ABI_BINDGEN_LOG_FORMAT` (plain|json)
- Address type : env `ABI_BINDGEN_ADDRESS_TYPE` / `ABI_BINDGEN_ADDRESS_MODULE`

On any generation error the command prints one line naming the entry and
reason, writes nothing, and exits with status 1.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import List, NoReturn, Optional

import typer

from .config import BindgenConfig
from .errors import BindgenError
from .files import load_abi_file
from .logging import setup_logging
from .pipeline import (check_distinct_outputs, generate_file, generate_many,
                       generate_module)
from .selector import function_selector
from .version import __version__

app = typer.Typer(
    name="abi-bindgen",
    help="Generate overload-safe Python bindings from contract ABI JSON.",
    no_args_is_help=True,
    add_completion=False,
)

__all__ = ["app", "main"]


def _config(ctx: typer.Context) -> BindgenConfig:
    return ctx.obj if isinstance(ctx.obj, BindgenConfig) else BindgenConfig.from_env()


def _fail(err: Exception) -> NoReturn:
    typer.echo(f"error: {err}", err=True)
    raise typer.Exit(code=1)


@app.callback()
def _root(
    ctx: typer.Context,
    log_level: Optional[str] = typer.Option(
        None, "--log-level", help="DEBUG, INFO, WARNING or ERROR.", envvar="ABI_BINDGEN_LOG_LEVEL"
    ),
    log_format: Optional[str] = typer.Option(
        None, "--log-format", help="plain or json.", envvar="ABI_BINDGEN_LOG_FORMAT"
    ),
) -> None:
    """Resolve configuration and set up logging for this process."""
    try:
        cfg = BindgenConfig.with_overrides(
            BindgenConfig.from_env(), log_level=log_level, log_format=log_format
        )
    except ValueError as e:
        raise typer.BadParameter(str(e))
    setup_logging(cfg.log_level, cfg.log_format)
    ctx.obj = cfg


@app.command("version")
def version() -> None:
    """Print the generator version."""
    typer.echo(f"abi-bindgen {__version__}")


@app.command("generate")
def generate(
    ctx: typer.Context,
    abi_path: Path = typer.Option(..., "--input", "-i", help="ABI JSON file.", exists=True, dir_okay=False),
    output: Path = typer.Option(..., "--output", "-o", help="Generated Python module."),
    name: Optional[str] = typer.Option(None, "--name", help="Interface name (default: input file stem)."),
) -> None:
    """Generate one binding module."""
    try:
        mod = generate_file(abi_path, output, name=name, config=_config(ctx))
    except (BindgenError, OSError) as e:
        _fail(e)
    typer.echo(f"wrote {output} ({len(mod.bindings)} bindings)")


@app.command("batch")
def batch(
    ctx: typer.Context,
    inputs: List[Path] = typer.Argument(..., help="ABI JSON files.", exists=True, dir_okay=False),
    out_dir: Path = typer.Option(..., "--out-dir", help="Directory for generated modules."),
    workers: Optional[int] = typer.Option(None, "--workers", min=1, help="Concurrent generation runs."),
) -> None:
    """Generate one module per input file; independent files run concurrently."""
    jobs = [(p, out_dir / f"{p.stem}.py") for p in inputs]
    try:
        check_distinct_outputs(jobs)
    except ValueError as e:
        raise typer.BadParameter(str(e))
    results = generate_many(jobs, config=_config(ctx), max_workers=workers)
    failed = 0
    for r in results:
        if r.ok and r.module is not None:
            typer.echo(f"wrote {r.output} ({len(r.module.bindings)} bindings)")
        else:
            failed += 1
            typer.echo(f"error: {r.input.name}: {r.error}", err=True)
    if failed:
        raise typer.Exit(code=1)


@app.command("selector")
def selector(signature: str = typer.Argument(..., help="Canonical signature, e.g. 'transfer(address,uint256)'.")) -> None:
    """Print the 4-byte selector of a canonical signature."""
    typer.echo(function_selector(signature.strip()))


@app.command("inspect")
def inspect(
    ctx: typer.Context,
    abi_path: Path = typer.Option(..., "--input", "-i", help="ABI JSON file.", exists=True, dir_okay=False),
    as_json: bool = typer.Option(False, "--json", help="Emit JSON instead of a table."),
) -> None:
    """List identifier, canonical signature and mutability per binding."""
    try:
        mod = generate_module(load_abi_file(abi_path), name=abi_path.stem, source=abi_path.name, config=_config(ctx))
    except (BindgenError, OSError) as e:
        _fail(e)
    rows = [
        {
            "identifier": mb.binding.identifier,
            "signature": mb.binding.signature,
            "selector": mb.binding.selector,
            "stateMutability": mb.binding.entry.state_mutability,
        }
        for mb in mod.bindings
    ]
    if as_json:
        typer.echo(json.dumps(rows, indent=2))
        return
    for r in rows:
        typer.echo(f"{r['identifier']}  {r['signature']}  {r['stateMutability']}")


def main(argv: Optional[List[str]] = None) -> int:
    """Run the CLI; returns the process exit code."""
    try:
        app(args=argv, prog_name="abi-bindgen")
    except SystemExit as e:
        return int(e.code or 0)
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
