"""
Alea CLI
=========

Click-based command-line interface for Alea. Provides subcommands for
chi-squared tests, unbiased sampling, shuffling, sampler uniformity
checks and PBKDF2 password hashing.

Usage::

    python -m alea chi2 --row "90,60,104,95" --row "30,50,51,20" --row "30,40,45,35"
    python -m alea sample 6 --count 10
    python -m alea shuffle ace king queen jack --seed 0011223344556677
    python -m alea uniformity --bound 10 --trials 100
    python -m alea hash "correct horse"
    python -m alea verify "correct horse" "sha1:64000:18:...:..."

References:
    - Click Documentation. https://click.palletsprojects.com/
"""

from __future__ import annotations

import json
from contextlib import contextmanager, nullcontext
from typing import Any, Iterator, Optional

import click
from pydantic import BaseModel
from rich.markup import escape

from alea_common.config import AleaConfig, get_config
from alea_common.console import AleaConsole

from alea import __version__
from alea.core.engine import AleaEngine
from alea.core.errors import AleaError
from alea.output.console import AleaConsoleOutput


# ===================================================================== #
#  Parameter Helpers
# ===================================================================== #

def _parse_seed(
    ctx: click.Context, param: click.Parameter, value: Optional[str]
) -> Optional[bytes]:
    """Decode a hex ``--seed`` into bytes."""
    if value is None:
        return None
    try:
        return bytes.fromhex(value)
    except ValueError:
        raise click.BadParameter(f"not a hex string: {value!r}")


def _parse_rows(
    ctx: click.Context, param: click.Parameter, value: tuple[str, ...]
) -> list[list[float]]:
    """Parse repeated ``--row "a,b,c"`` options into a grid."""
    rows: list[list[float]] = []
    for raw in value:
        try:
            rows.append([float(cell) for cell in raw.split(",") if cell.strip()])
        except ValueError:
            raise click.BadParameter(f"row is not a list of numbers: {raw!r}")
    return rows


_seed_option = click.option(
    "--seed",
    default=None,
    callback=_parse_seed,
    help="Hex-encoded seed for a reproducible stream (at least 8 bytes).",
)


@contextmanager
def _errors_exit(ctx: click.Context) -> Iterator[None]:
    """Report :class:`AleaError` and exit with status 2."""
    try:
        yield
    except AleaError as exc:
        if ctx.obj["output_format"] == "json":
            click.echo(json.dumps({"error": type(exc).__name__, "message": str(exc)}), err=True)
        else:
            ctx.obj["console"].error(escape(str(exc)))
        ctx.exit(2)


def _emit_json(payload: Any) -> None:
    if isinstance(payload, BaseModel):
        payload = payload.model_dump()
    click.echo(json.dumps(payload, indent=2, ensure_ascii=False, default=str))


# ===================================================================== #
#  CLI Group
# ===================================================================== #

@click.group()
@click.option(
    "--config", "-c",
    type=click.Path(exists=True, dir_okay=False),
    default=None,
    help="Path to Alea configuration file (TOML).",
)
@click.option(
    "--output", "-o",
    type=click.Choice(["console", "json"]),
    default="console",
    help="Output format.",
)
@click.option(
    "--quiet", "-q",
    is_flag=True,
    default=False,
    help="Suppress banner and informational output.",
)
@click.version_option(__version__, prog_name="alea")
@click.pass_context
def cli(
    ctx: click.Context,
    config: Optional[str],
    output: str,
    quiet: bool,
) -> None:
    """Alea -- unbiased randomness and chi-squared validation.

    Sample integers without modulo bias, shuffle sequences, test
    contingency tables and hash passwords.
    """
    ctx.ensure_object(dict)

    alea_config = AleaConfig.load(config) if config else get_config()
    ctx.obj["config"] = alea_config
    ctx.obj["output_format"] = output
    ctx.obj["quiet"] = quiet

    console = AleaConsole(quiet=quiet)
    ctx.obj["console"] = console
    ctx.obj["engine"] = AleaEngine(alea_config)
    ctx.obj["display"] = AleaConsoleOutput(console)

    if not quiet and output == "console":
        console.banner(version=alea_config.global_settings.version)


# ===================================================================== #
#  Subcommands
# ===================================================================== #

@cli.command()
@click.option(
    "--row", "rows",
    multiple=True,
    required=True,
    callback=_parse_rows,
    help='Comma-separated observed counts for one row, e.g. "10,20,30".',
)
@click.option(
    "--alpha",
    type=float,
    default=None,
    help="Significance level (default from config).",
)
@click.pass_context
def chi2(ctx: click.Context, rows: list[list[float]], alpha: Optional[float]) -> None:
    """Run Pearson's chi-squared test on a table of observed counts.

    One --row gives a goodness-of-fit test against the uniform
    distribution; several give a test of independence.
    """
    engine: AleaEngine = ctx.obj["engine"]

    with _errors_exit(ctx):
        result = engine.chi_squared(rows, alpha=alpha)

    if ctx.obj["output_format"] == "json":
        _emit_json(result)
    else:
        ctx.obj["display"].display_chi_squared(result)


@cli.command()
@click.argument("bound", type=int)
@click.option("--count", "-n", type=click.IntRange(min=1), default=1, help="Number of draws.")
@_seed_option
@click.pass_context
def sample(ctx: click.Context, bound: int, count: int, seed: Optional[bytes]) -> None:
    """Draw uniform integers in [0, BOUND)."""
    engine: AleaEngine = ctx.obj["engine"]

    with _errors_exit(ctx):
        result = engine.sample(bound, count=count, seed=seed)

    if ctx.obj["output_format"] == "json":
        _emit_json(result)
    else:
        ctx.obj["display"].display_sample(result)


@cli.command()
@click.argument("items", nargs=-1, required=True)
@_seed_option
@click.pass_context
def shuffle(ctx: click.Context, items: tuple[str, ...], seed: Optional[bytes]) -> None:
    """Shuffle ITEMS with Fisher-Yates."""
    engine: AleaEngine = ctx.obj["engine"]

    with _errors_exit(ctx):
        result = engine.shuffle(list(items), seed=seed)

    if ctx.obj["output_format"] == "json":
        _emit_json(result)
    else:
        ctx.obj["display"].display_shuffle(result)


@cli.command()
@click.option("--bound", type=int, default=None, help="Exclusive upper bound to sample.")
@click.option("--samples", type=int, default=None, help="Draws per trial.")
@click.option("--trials", type=int, default=None, help="Number of trials.")
@_seed_option
@click.pass_context
def uniformity(
    ctx: click.Context,
    bound: Optional[int],
    samples: Optional[int],
    trials: Optional[int],
    seed: Optional[bytes],
) -> None:
    """Check that the sampler is unbiased with repeated chi-squared trials.

    Exits with status 1 if the pass rate falls below the configured
    requirement.
    """
    engine: AleaEngine = ctx.obj["engine"]
    console: AleaConsole = ctx.obj["console"]

    spinner = (
        nullcontext()
        if ctx.obj["output_format"] == "json"
        else console.status("Running uniformity trials...")
    )
    with _errors_exit(ctx), spinner:
        report = engine.check_uniformity(
            bound=bound, samples=samples, trials=trials, seed=seed
        )

    if ctx.obj["output_format"] == "json":
        _emit_json(report)
    else:
        ctx.obj["display"].display_uniformity(report)

    if not report.passed:
        ctx.exit(1)


@cli.command("hash")
@click.argument("password")
@click.pass_context
def hash_cmd(ctx: click.Context, password: str) -> None:
    """Hash PASSWORD with salted PBKDF2-HMAC-SHA1."""
    engine: AleaEngine = ctx.obj["engine"]

    with _errors_exit(ctx):
        hashed = engine.hash_password(password)

    if ctx.obj["output_format"] == "json":
        _emit_json({"hash": hashed})
    else:
        click.echo(hashed)


@cli.command()
@click.argument("password")
@click.argument("hashed")
@click.pass_context
def verify(ctx: click.Context, password: str, hashed: str) -> None:
    """Check PASSWORD against a stored HASHED string.

    Exits with status 1 when the password does not match.
    """
    engine: AleaEngine = ctx.obj["engine"]

    with _errors_exit(ctx):
        result = engine.verify_password(password, hashed)

    if ctx.obj["output_format"] == "json":
        _emit_json(result)
    else:
        ctx.obj["display"].display_verification(result)

    if not result.valid:
        ctx.exit(1)


# ===================================================================== #
#  Entry Point
# ===================================================================== #

def main() -> None:
    """Main entry point for the Alea CLI."""
    cli(obj={})


if __name__ == "__main__":
    main()
