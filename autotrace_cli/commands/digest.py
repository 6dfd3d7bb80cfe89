"""
Module 05 - CLI Digest Commands

Compute digests from the command line. Standard output carries only the
64-character hex digest line; diagnostics go to stderr.

Usage:
    echo '{"op":"hash","payload":"abc"}' | autotrace run
    autotrace run --input request.json
    autotrace hash "abc"
    autotrace merkle-root a b c
"""

from __future__ import annotations

import logging
import sys
from argparse import Namespace
from pathlib import Path

from autotrace.dispatcher import OperationDispatcher
from autotrace.schemas.requests import HashRequest, MerkleRootRequest


logger = logging.getLogger(__name__)


# Exit codes
EXIT_SUCCESS = 0
EXIT_RUNTIME_ERROR = 1


def dispatcher_for(args: Namespace) -> OperationDispatcher:
    """Dispatcher carrying the limits of the loaded CLI configuration."""
    cli_config = getattr(args, "cli_config", None)
    if cli_config is None:
        return OperationDispatcher()
    return OperationDispatcher(cli_config.to_runtime_config())


def read_document(input_path: str | None) -> bytes:
    """Read a request document from a file, or from stdin when no path (or "-") is given."""
    if input_path is None or input_path == "-":
        logger.info("Reading request document from stdin")
        return sys.stdin.buffer.read()
    path = Path(input_path)
    logger.info(f"Reading request document from: {path}")
    return path.read_bytes()


def run_cmd(args: Namespace) -> int:
    """
    Decode one request document and print its digest.

    Returns:
        Exit code
    """
    document = read_document(args.input)
    result = dispatcher_for(args).handle(document)
    print(result)
    return EXIT_SUCCESS


def hash_cmd(args: Namespace) -> int:
    """Print the digest of a single text payload."""
    result = dispatcher_for(args).dispatch(HashRequest(payload=args.payload))
    print(result)
    return EXIT_SUCCESS


def merkle_root_cmd(args: Namespace) -> int:
    """Print the Merkle root of the given leaves, in order."""
    result = dispatcher_for(args).dispatch(MerkleRootRequest(leaves=list(args.leaves)))
    print(result)
    return EXIT_SUCCESS
