"""Logging setup used by ``python -m cryptex``."""

import logging
import sys


def configure_logging(level: int = logging.WARNING) -> None:
    # stdout carries ciphertext or plaintext, so log records must go to stderr
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)-8s %(name)s  %(message)s",
        stream=sys.stderr,
    )
