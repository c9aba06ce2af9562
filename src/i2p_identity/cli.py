"""CLI entry point for i2p-identity."""

from __future__ import annotations

import sys
from pathlib import Path

import click

from i2p_identity.config import IdentitySettings, load_settings
from i2p_identity.core import keys_and_cert_from_bytes, keys_and_cert_to_bytes
from i2p_identity.errors import CodecError
from i2p_identity.logging_config import setup_logging
from i2p_identity.models import (
    KeyCertificate,
    KeysAndCert,
    PublicKey,
    SigningPublicKey,
)
from i2p_identity.registry import SigningKeyAlgorithm, padding_size
from i2p_identity.store import IdentityStore

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _load_identity(path: str) -> KeysAndCert:
    return keys_and_cert_from_bytes(Path(path).read_bytes())


def _describe(identity: KeysAndCert) -> list[str]:
    signing_key = identity.signing_key
    padding, overflow = padding_size(signing_key.algorithm)
    certificate = identity.certificate
    lines = [
        f"Public Key   : {identity.public_key.algorithm.name} "
        f"({len(identity.public_key.data)} bytes)",
        f"Signing Key  : {signing_key.algorithm.name} ({signing_key.length} bytes)",
        f"  Padding    : {padding} bytes",
        f"  Overflow   : {overflow} bytes",
        f"Certificate  : {certificate.cert_type.name} "
        f"({certificate.payload_size} byte payload)",
    ]
    if isinstance(certificate, KeyCertificate):
        lines.append(f"  Crypto Key : {certificate.crypto_key_algorithm.name}")
    lines.append(f"Size         : {identity.serialized_size} bytes")
    return lines


# ---------------------------------------------------------------------------
# CLI
# ---------------------------------------------------------------------------


@click.group()
@click.version_option()
@click.option("--log-level", default=None, help="Log level (default: INFO).")
@click.option(
    "--log-format",
    type=click.Choice(["console", "json"]),
    default=None,
    help="Log output format (default: console).",
)
@click.pass_context
def main(ctx: click.Context, log_level: str | None, log_format: str | None) -> None:
    """i2p-identity: encode, decode and store router identities."""
    settings = load_settings(log_level=log_level, log_format=log_format)
    setup_logging(settings.log_level, settings.log_format)
    ctx.obj = settings


@main.command("inspect")
@click.argument("path", type=click.Path(exists=True, dir_okay=False))
@click.option("--json-output", is_flag=True, help="Emit the decoded identity as JSON.")
def inspect_command(path: str, json_output: bool) -> None:
    """Decode the router identity stored in PATH and describe it."""
    try:
        identity = _load_identity(path)
    except (CodecError, OSError) as exc:
        click.echo(f"Error decoding identity: {exc}", err=True)
        sys.exit(1)

    if json_output:
        click.echo(identity.model_dump_json(indent=2))
        return

    for line in _describe(identity):
        click.echo(line)


@main.command("assemble")
@click.option(
    "--public-key",
    "public_key_path",
    required=True,
    type=click.Path(exists=True, dir_okay=False),
    help="File holding the raw 256-byte ElGamal public key.",
)
@click.option(
    "--signing-key",
    "signing_key_path",
    required=True,
    type=click.Path(exists=True, dir_okay=False),
    help="File holding the raw signing public key.",
)
@click.option(
    "--algorithm",
    type=click.Choice([a.name for a in SigningKeyAlgorithm], case_sensitive=False),
    default=SigningKeyAlgorithm.EdDSA_SHA512_Ed25519.name,
    show_default=True,
    help="Signing key algorithm.",
)
@click.option(
    "--output",
    required=True,
    metavar="PATH",
    help="Where to write the encoded identity.",
)
def assemble_command(
    public_key_path: str,
    signing_key_path: str,
    algorithm: str,
    output: str,
) -> None:
    """Build a router identity from raw key files."""
    try:
        identity = KeysAndCert.from_keys(
            PublicKey(data=Path(public_key_path).read_bytes()),
            SigningPublicKey(
                algorithm=SigningKeyAlgorithm[algorithm],
                data=Path(signing_key_path).read_bytes(),
            ),
        )
        encoded = keys_and_cert_to_bytes(identity)
        Path(output).write_bytes(encoded)
    except (ValueError, CodecError, OSError) as exc:
        click.echo(f"Error: {exc}", err=True)
        sys.exit(1)

    click.echo(f"Identity written to: {output}")
    click.echo(f"  Algorithm: {identity.signing_key.algorithm.name}")
    click.echo(f"  Size     : {len(encoded)} bytes")


# ---------------------------------------------------------------------------
# store
# ---------------------------------------------------------------------------


@main.group("store")
@click.option(
    "--data-dir",
    default=None,
    metavar="DIR",
    help="Root data directory (default: I2P_IDENTITY_DATA_DIR or ~/.i2p-identity).",
)
@click.pass_context
def store_group(ctx: click.Context, data_dir: str | None) -> None:
    """Manage the on-disk identity store."""
    settings: IdentitySettings = ctx.obj
    try:
        ctx.obj = IdentityStore(
            data_dir or settings.data_dir, app=settings.app, kind=settings.kind
        )
    except (ValueError, OSError) as exc:
        click.echo(f"Error opening store: {exc}", err=True)
        sys.exit(1)


@store_group.command("add")
@click.argument("key")
@click.argument("path", type=click.Path(exists=True, dir_okay=False))
@click.pass_obj
def store_add_command(store: IdentityStore, key: str, path: str) -> None:
    """Decode PATH and store it under KEY."""
    try:
        identity = _load_identity(path)
        stored_at = store.store(key, identity)
    except (ValueError, CodecError, OSError) as exc:
        click.echo(f"Error: {exc}", err=True)
        sys.exit(1)
    click.echo(f"Stored '{key}' at {stored_at}")


@store_group.command("list")
@click.pass_obj
def store_list_command(store: IdentityStore) -> None:
    """List stored identities (corrupt records are skipped)."""
    identities = store.load()
    if not identities:
        click.echo("No identities stored.")
        return
    for key, identity in sorted(identities.items()):
        click.echo(
            f"{key}  {identity.signing_key.algorithm.name}  "
            f"{identity.serialized_size} bytes"
        )


@store_group.command("show")
@click.argument("key")
@click.pass_obj
def store_show_command(store: IdentityStore, key: str) -> None:
    """Describe the identity stored under KEY."""
    try:
        identity = store.get(key)
    except (ValueError, CodecError, OSError) as exc:
        click.echo(f"Error: {exc}", err=True)
        sys.exit(1)
    if identity is None:
        click.echo(f"Error: identity not found: {key}", err=True)
        sys.exit(1)
    for line in _describe(identity):
        click.echo(line)


@store_group.command("remove")
@click.argument("key")
@click.pass_obj
def store_remove_command(store: IdentityStore, key: str) -> None:
    """Delete the identity stored under KEY."""
    try:
        store.remove(key)
    except (KeyError, ValueError, OSError) as exc:
        click.echo(f"Error: {exc}", err=True)
        sys.exit(1)
    click.echo(f"Removed '{key}'")


if __name__ == "__main__":
    main()
