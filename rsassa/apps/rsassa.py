#!/usr/bin/env python
# -*- coding: UTF-8 -*-
#
# Copyright 2026 NXP
#
# SPDX-License-Identifier: BSD-3-Clause

"""Console application generating RSA keys and RSA-SSA-PKCS1v15 signatures."""

import asyncio
import logging
import os
import sys
from typing import Optional

import click

from rsassa.apps.utils import rsassa_logger
from rsassa.apps.utils.common_cli_options import (
    rsassa_apps_common_options,
    rsassa_hash_option,
    rsassa_plugin_option,
    rsassa_provider_option,
)
from rsassa.apps.utils.utils import INT, RSASSAAppError, catch_rsassa_error
from rsassa.crypto import jwk
from rsassa.crypto.keys import Signature
from rsassa.crypto.providers import get_provider
from rsassa.crypto.rsa_ssa_pkcs1v15 import RsaSsaPkcs1v15
from rsassa.utils.misc import int_to_bytes, load_binary, load_text, write_file
from rsassa.utils.plugins import PluginsManager

logger = logging.getLogger(__name__)


def check_file_exists(path: str, force: bool = False) -> None:
    """Check that the output file may be written.

    :param path: Output file path.
    :param force: Overwriting of existing files is allowed.
    :raises RSASSAAppError: The file exists and force is not set.
    """
    if os.path.isfile(path) and not force:
        raise RSASSAAppError(f"File '{path}' already exists. Use --force to overwrite it.")


def get_public_key_path(path: str) -> str:
    """Get path of the public key stored beside the private key."""
    return os.path.splitext(path)[0] + ".pub.jwk"


@click.group(name="rsassa", no_args_is_help=True)
@rsassa_provider_option
@rsassa_plugin_option
@rsassa_apps_common_options
@click.pass_context
def main(ctx: click.Context, provider: str, plugin: Optional[str], log_level: int) -> int:
    """RSA-SSA-PKCS1v15 key generation, signing and verification tool."""
    rsassa_logger.install(level=log_level)
    plugins_manager = PluginsManager()
    plugins_manager.load_from_entrypoints()
    if plugin:
        plugins_manager.load_from_source_file(plugin)
    ctx.obj = {"provider": get_provider(provider)}
    return 0


@main.command(name="generate", no_args_is_help=True)
@click.option(
    "-o",
    "--output",
    type=click.Path(dir_okay=False, resolve_path=True),
    required=True,
    help="Path of the private key JWK file, the public key is stored beside it as .pub.jwk.",
)
@click.option(
    "-m",
    "--modulus-length",
    type=INT(),
    default=str(RsaSsaPkcs1v15.DEFAULT_MODULUS_LENGTH),
    show_default=True,
    help="Modulus length in bits.",
)
@click.option(
    "-e",
    "--public-exponent",
    type=INT(),
    default="65537",
    show_default=True,
    help="Public exponent.",
)
@rsassa_hash_option
@click.option("--force", is_flag=True, default=False, help="Force overwriting of existing files.")
@click.pass_context
def generate(
    ctx: click.Context,
    output: str,
    modulus_length: int,
    public_exponent: int,
    hash_algorithm: str,
    force: bool,
) -> None:
    """Generate RSA key pair and store it as JWK files."""
    public_path = get_public_key_path(output)
    check_file_exists(output, force)
    check_file_exists(public_path, force)

    async def run() -> tuple[dict, dict]:
        scheme = RsaSsaPkcs1v15(hash_algorithm, provider=ctx.obj["provider"])
        logger.info(f"Generating RSA{modulus_length} key pair...")
        key_pair = await scheme.new_key_pair(modulus_length, int_to_bytes(public_exponent))
        private_key = await scheme.extract_private(key_pair)
        public_key = await scheme.extract_public(key_pair)
        return jwk.private_key_to_jwk(private_key), jwk.public_key_to_jwk(public_key)

    private_jwk, public_jwk = asyncio.run(run())
    write_file(jwk.dumps(private_jwk), output)
    write_file(jwk.dumps(public_jwk), public_path)
    click.echo(f"The key pair has been created: {public_path}, {output}")


@main.command(name="sign", no_args_is_help=True)
@click.option(
    "-k",
    "--key",
    type=click.Path(exists=True, dir_okay=False, resolve_path=True),
    required=True,
    help="Private key JWK file.",
)
@click.option(
    "-i",
    "--input",
    "input_file",
    type=click.Path(exists=True, dir_okay=False, resolve_path=True),
    required=True,
    help="Message to sign.",
)
@click.option(
    "-o",
    "--output",
    type=click.Path(dir_okay=False, resolve_path=True),
    required=True,
    help="Output file of the raw signature.",
)
@rsassa_hash_option
@click.pass_context
def sign(ctx: click.Context, key: str, input_file: str, output: str, hash_algorithm: str) -> None:
    """Sign a message by RSA private key."""
    fields = jwk.loads(load_text(key))
    if not jwk.is_private_jwk(fields):
        raise RSASSAAppError(f"File '{key}' doesn't hold a private key")
    private_key = jwk.private_key_from_jwk(fields)
    message = load_binary(input_file)

    scheme = RsaSsaPkcs1v15(hash_algorithm, provider=ctx.obj["provider"])
    signature = asyncio.run(scheme.sign(message, private_key))
    write_file(signature.bytes, output, mode="wb")
    click.echo(f"The signature has been stored: {output}")


@main.command(name="verify", no_args_is_help=True)
@click.option(
    "-k",
    "--key",
    type=click.Path(exists=True, dir_okay=False, resolve_path=True),
    required=True,
    help="Public (or private) key JWK file.",
)
@click.option(
    "-i",
    "--input",
    "input_file",
    type=click.Path(exists=True, dir_okay=False, resolve_path=True),
    required=True,
    help="Signed message.",
)
@click.option(
    "-s",
    "--signature",
    type=click.Path(exists=True, dir_okay=False, resolve_path=True),
    required=True,
    help="Raw signature file.",
)
@rsassa_hash_option
@click.pass_context
def verify(
    ctx: click.Context, key: str, input_file: str, signature: str, hash_algorithm: str
) -> None:
    """Verify a signature by RSA public key."""
    public_key = jwk.public_key_from_jwk(jwk.loads(load_text(key)))
    message = load_binary(input_file)

    scheme = RsaSsaPkcs1v15(hash_algorithm, provider=ctx.obj["provider"])
    valid = asyncio.run(scheme.verify(message, Signature(load_binary(signature), public_key)))
    if not valid:
        raise RSASSAAppError("Signature is NOT valid", error_code=1)
    click.echo("Signature IS valid")


@catch_rsassa_error
def safe_main() -> None:
    """Call the main function."""
    sys.exit(main())  # pylint: disable=no-value-for-parameter


if __name__ == "__main__":
    safe_main()
