#!/usr/bin/env python3
"""CLI interface for cryptex.

This interface can be used to generate salts, encrypt and decrypt files.
"""
import logging
import sys
from argparse import ArgumentParser, FileType
from collections.abc import Sequence
from getpass import getpass
from pathlib import Path
from typing import BinaryIO, TextIO

from . import CryptexError, decrypt, encrypt, generate_salt
from .kdf import DEFAULT_SALT_SIZE
from .logging_config import configure_logging
from .memory import wipe

logger = logging.getLogger(__name__)


def main(argv: Sequence[str] | None = None) -> None:
    """Entrypoint for the CLI."""
    parser = ArgumentParser(prog="cryptex")
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="log debug information to stderr",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    salt_parser = subparsers.add_parser("salt", help="generate a random salt")
    salt_parser.add_argument(
        "-o",
        "--output",
        dest="outfile",
        type=FileType("w", encoding="ascii"),
        default=sys.stdout,
    )
    salt_parser.add_argument(
        "-n",
        "--length",
        type=int,
        default=DEFAULT_SALT_SIZE,
        help="salt length in bytes",
    )

    encrypt_parser = subparsers.add_parser("encrypt", help="encrypt a file")
    encrypt_parser.add_argument(
        "-o",
        "--output",
        dest="outfile",
        type=FileType("w", encoding="ascii"),
        default=sys.stdout,
    )
    _add_secret_arguments(encrypt_parser)
    encrypt_parser.add_argument(
        "infile",
        metavar="INPUT",
        type=FileType("rb"),
        default=sys.stdin.buffer,
        nargs="?",
    )

    decrypt_parser = subparsers.add_parser("decrypt", help="decrypt a file")
    decrypt_parser.add_argument(
        "-o",
        "--output",
        dest="outfile",
        type=FileType("wb"),
        default=sys.stdout.buffer,
    )
    _add_secret_arguments(decrypt_parser)
    decrypt_parser.add_argument(
        "infile",
        metavar="INPUT",
        type=FileType("rb"),
        default=sys.stdin.buffer,
        nargs="?",
    )

    args = parser.parse_args(argv)
    configure_logging(logging.DEBUG if args.verbose else logging.WARNING)

    try:
        match args.command:
            case "salt":
                salt_(length=args.length, outfile=args.outfile)

            case "encrypt":
                encrypt_(
                    salt=_read_salt(args.salt, args.salt_file),
                    passphrase_file=args.passphrase_file,
                    require_salt=args.require_salt,
                    infile=args.infile,
                    outfile=args.outfile,
                )

            case "decrypt":
                decrypt_(
                    salt=_read_salt(args.salt, args.salt_file),
                    passphrase_file=args.passphrase_file,
                    require_salt=args.require_salt,
                    infile=args.infile,
                    outfile=args.outfile,
                )
    except CryptexError as e:
        logger.debug("%s failed", args.command, exc_info=True)
        sys.exit(f"cryptex: {e}")


def _add_secret_arguments(parser: ArgumentParser) -> None:
    salt_group = parser.add_mutually_exclusive_group()
    salt_group.add_argument(
        "-s",
        "--salt",
        metavar="HEX",
        help="hex encoded salt",
    )
    salt_group.add_argument(
        "-S",
        "--salt-file",
        metavar="PATH",
        type=Path,
        help="file containing a hex encoded salt",
    )
    parser.add_argument(
        "--require-salt",
        action="store_true",
        help="refuse to run without a non-empty salt",
    )
    parser.add_argument(
        "-P",
        "--passphrase-file",
        metavar="PATH",
        type=Path,
        help="read the passphrase from the first line of a file instead of prompting",
    )


def _read_salt(salt_hex: str | None, salt_file: Path | None) -> bytearray | None:
    if salt_file is not None:
        salt_hex = salt_file.read_text(encoding="ascii")
    if salt_hex is None:
        return None
    try:
        return bytearray.fromhex(salt_hex.strip())
    except ValueError as e:
        raise RuntimeError("salt must be hex encoded") from e


def _read_passphrase(passphrase_file: Path | None, confirm: bool) -> bytearray:
    if passphrase_file is not None:
        with open(passphrase_file, "rb") as f:
            return bytearray(f.readline().rstrip(b"\r\n"))

    passphrase = getpass("Enter passphrase: ")
    if confirm and passphrase != getpass("Confirm passphrase: "):
        raise RuntimeError("passphrases didn't match")
    return bytearray(passphrase.encode())


def salt_(length: int, outfile: TextIO) -> None:
    """Generate a salt"""
    outfile.write(f"{generate_salt(length).hex()}\n")
    outfile.flush()


def encrypt_(
    salt: bytearray | None,
    passphrase_file: Path | None,
    require_salt: bool,
    infile: BinaryIO,
    outfile: TextIO,
) -> None:
    """Encrypt a file"""
    passphrase = bytearray()
    try:
        passphrase = _read_passphrase(passphrase_file, confirm=True)
        ciphertext = encrypt(
            infile.read(), passphrase, salt, require_salt=require_salt
        )
    finally:
        wipe(passphrase)
        if salt is not None:
            wipe(salt)

    outfile.write(f"{ciphertext}\n")
    outfile.flush()


def decrypt_(
    salt: bytearray | None,
    passphrase_file: Path | None,
    require_salt: bool,
    infile: BinaryIO,
    outfile: BinaryIO,
) -> None:
    """Decrypt a file"""
    passphrase = bytearray()
    try:
        passphrase = _read_passphrase(passphrase_file, confirm=False)
        plaintext = decrypt(
            infile.read().strip(), passphrase, salt, require_salt=require_salt
        )
    finally:
        wipe(passphrase)
        if salt is not None:
            wipe(salt)

    try:
        outfile.write(plaintext)
        outfile.flush()
    except BrokenPipeError:
        pass


if __name__ == "__main__":
    main()
