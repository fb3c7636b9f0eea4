"""Command-line interface for helloprint."""

from __future__ import annotations

import dataclasses
import json
import logging
import sys
from pathlib import Path

import click

from .. import __version__
from ..core.config import FingerprintConfig
from ..core.errors import HandshakeError
from ..core.types import HandshakeRole, TransportMode
from ..fingerprint.assemble import fingerprint_handshake

logger = logging.getLogger(__name__)


def setup_logging(verbose: bool) -> None:
    """Configure logging based on verbosity."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )


def _decode_hex(text: str) -> bytes:
    cleaned = "".join(text.split()).replace(":", "")
    if cleaned.startswith(("0x", "0X")):
        cleaned = cleaned[2:]
    try:
        return bytes.fromhex(cleaned)
    except ValueError as e:
        raise click.BadParameter(f"not a hex string: {e}") from e


def _load_config(config_file: str | None) -> FingerprintConfig:
    if not config_file:
        return FingerprintConfig()
    try:
        config = FingerprintConfig.from_file(config_file)
    except Exception as e:
        raise click.ClickException(f"Failed to load config file: {e}")
    logger.debug(f"Loaded config from: {config_file}")
    return config


@click.group()
@click.version_option(version=__version__, prog_name="helloprint")
@click.option("-v", "--verbose", is_flag=True, help="Enable verbose output")
@click.pass_context
def cli(ctx: click.Context, verbose: bool) -> None:
    """helloprint: TLS hello fingerprinting.

    Compute client and server fingerprints from raw hello messages.
    """
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    setup_logging(verbose)


@cli.command()
@click.argument("hex_data", required=False)
@click.option(
    "--file",
    "input_file",
    type=click.Path(exists=True, dir_okay=False),
    help="Read the raw message bytes from a binary file.",
)
@click.option(
    "--role",
    type=click.Choice([r.value for r in HandshakeRole]),
    default=HandshakeRole.CLIENT.value,
    show_default=True,
    help="Which side sent the hello.",
)
@click.option(
    "-m",
    "--mode",
    type=click.Choice([m.value for m in TransportMode]),
    default=TransportMode.STREAM.value,
    show_default=True,
    help="Transport the hello was carried on.",
)
@click.option(
    "-c",
    "--config",
    "config_file",
    type=click.Path(exists=True),
    help="Configuration file (JSON or YAML).",
)
@click.option("--json", "as_json", is_flag=True, help="Print fingerprint and parsed fields as JSON.")
@click.option("-r", "--raw", is_flag=True, help="Include the raw (unhashed) fingerprint.")
@click.option(
    "-O",
    "--original-order",
    is_flag=True,
    help="Keep extensions in their offered order, including SNI and ALPN.",
)
@click.option("--sorted-ciphers", is_flag=True, help="Sort ciphers before hashing.")
def fingerprint(
    hex_data: str | None,
    input_file: str | None,
    role: str,
    mode: str,
    config_file: str | None,
    as_json: bool,
    raw: bool,
    original_order: bool,
    sorted_ciphers: bool,
) -> None:
    """Fingerprint one Client Hello or Server Hello.

    HEX_DATA is the message as hex. Without it, the message is read from
    --file, or as hex from standard input.

    Examples:

        helloprint fingerprint 160301...

        helloprint fingerprint --file hello.bin --role server

        xxd -p hello.bin | helloprint fingerprint --json
    """
    if hex_data and input_file:
        raise click.UsageError("Give either HEX_DATA or --file, not both.")
    if input_file:
        data = Path(input_file).read_bytes()
    elif hex_data:
        data = _decode_hex(hex_data)
    else:
        data = _decode_hex(click.get_text_stream("stdin").read())

    # CLI options override config file
    config = _load_config(config_file)
    overrides: dict[str, object] = {}
    if raw:
        overrides["include_raw"] = True
    if original_order:
        overrides["original_order"] = True
    if sorted_ciphers:
        overrides["cipher_order"] = "sorted"
    if overrides:
        config = dataclasses.replace(config, **overrides)

    try:
        result = fingerprint_handshake(data, role, mode, config)
    except HandshakeError as e:
        raise click.ClickException(f"{type(e).__name__}: {e}")

    if result.degraded:
        click.echo(
            f"Warning: degraded fingerprint ({'; '.join(result.fields.issues)})",
            err=True,
        )

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        return

    fp = result.fingerprint
    click.echo(f"{fp.kind}: {fp.value}")
    if fp.raw:
        click.echo(f"{fp.kind}_r: {fp.raw}")


if __name__ == "__main__":
    cli()
