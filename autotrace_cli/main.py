"""
Module 05 - CLI Main Entry Point

Parses command-line arguments and dispatches to subcommands.

Usage:
    autotrace run [--input PATH]
    autotrace hash PAYLOAD
    autotrace merkle-root [LEAF ...]
    autotrace prove --index N LEAF [LEAF ...]
    autotrace verify-proof PATH [--payload TEXT] [--json]
    autotrace config --init|--show

Environment Variables:
    AUTOTRACE_LOG_LEVEL           Log level (default: WARNING)
    AUTOTRACE_LOG_FILE            Optional log file
    AUTOTRACE_MAX_LEAVES          Maximum leaves per merkle-root request
    AUTOTRACE_MAX_PAYLOAD_BYTES   Maximum UTF-8 size of one payload
    AUTOTRACE_MAX_REQUEST_BYTES   Maximum size of a request document
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
import traceback
from pathlib import Path
from typing import Sequence

from autotrace import __version__
from autotrace.schemas.errors import AutotraceException
from autotrace_cli.commands import digest, proof
from autotrace_cli.config import load_config, get_default_config_template


logger = logging.getLogger(__name__)


# Exit codes
EXIT_SUCCESS = 0
EXIT_RUNTIME_ERROR = 1
EXIT_VERIFICATION_FAILED = 2


def setup_logging(level: str = "WARNING", log_file: str | None = None) -> None:
    """Configure logging for the CLI. Logs never go to stdout."""
    log_level = getattr(logging, level.upper(), logging.WARNING)

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]

    if log_file:
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(
        level=log_level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        handlers=handlers,
        force=True,
    )


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser with all subcommands."""
    parser = argparse.ArgumentParser(
        prog="autotrace",
        description="Autotrace - SHA-256 digests and Merkle roots for ordered payloads.",
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}"
    )
    parser.add_argument(
        "--config", "-c",
        type=Path,
        default=None,
        help="Path to configuration file (default: ./autotrace.json or ~/.config/autotrace/config.json)",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Log level (overrides config)",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        default=False,
        help="Print tracebacks for unexpected errors",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # --- run command ---
    run_parser = subparsers.add_parser(
        "run",
        help="Execute one JSON request document",
        description='Read {"op": "hash", ...} or {"op": "merkle-root", ...} and print the hex digest.',
    )
    run_parser.add_argument(
        "--input", "-i",
        type=str,
        default=None,
        help="Request document path (default: stdin)",
    )
    run_parser.set_defaults(func=digest.run_cmd)

    # --- hash command ---
    hash_parser = subparsers.add_parser(
        "hash",
        help="Print the SHA-256 digest of a text payload",
    )
    hash_parser.add_argument("payload", type=str, help="Text hashed as its UTF-8 bytes")
    hash_parser.set_defaults(func=digest.hash_cmd)

    # --- merkle-root command ---
    root_parser = subparsers.add_parser(
        "merkle-root",
        help="Print the Merkle root of the given leaves",
    )
    root_parser.add_argument("leaves", nargs="*", help="Leaf payloads, in order")
    root_parser.set_defaults(func=digest.merkle_root_cmd)

    # --- prove command ---
    prove_parser = subparsers.add_parser(
        "prove",
        help="Print an inclusion proof for one leaf",
    )
    prove_parser.add_argument("--index", type=int, required=True, help="0-based leaf index")
    prove_parser.add_argument("leaves", nargs="*", help="Leaf payloads, in order")
    prove_parser.set_defaults(func=proof.prove_cmd)

    # --- verify-proof command ---
    verify_parser = subparsers.add_parser(
        "verify-proof",
        help="Verify a JSON inclusion proof",
    )
    verify_parser.add_argument("proof_path", type=str, help='Proof document path, or "-" for stdin')
    verify_parser.add_argument(
        "--payload",
        type=str,
        default=None,
        help="Also require the proof's leaf to be the digest of this text",
    )
    verify_parser.add_argument(
        "--json",
        action="store_true",
        default=False,
        help="Output machine-readable JSON result",
    )
    verify_parser.set_defaults(func=proof.verify_proof_cmd)

    # --- config command ---
    config_parser = subparsers.add_parser(
        "config",
        help="Manage CLI configuration",
        description="Initialize or display configuration.",
    )
    config_parser.add_argument(
        "--init",
        action="store_true",
        default=False,
        help="Create a template configuration file",
    )
    config_parser.add_argument(
        "--show",
        action="store_true",
        default=False,
        help="Show current configuration",
    )
    config_parser.add_argument(
        "--path",
        type=str,
        default="autotrace.json",
        help="Path for config file (default: autotrace.json)",
    )
    config_parser.set_defaults(func=config_cmd)

    return parser


def config_cmd(args: argparse.Namespace) -> int:
    """Handle config command."""
    if args.init:
        config_path = Path(args.path)
        if config_path.exists():
            print(f"Error: Config file already exists: {config_path}", file=sys.stderr)
            return EXIT_RUNTIME_ERROR

        config_path.write_text(get_default_config_template())
        print(f"Created configuration file: {config_path}")
        print("You can also use environment variables (AUTOTRACE_* prefix).")
        return EXIT_SUCCESS

    if args.show:
        print(json.dumps(args.cli_config.to_dict(), indent=2))
        return EXIT_SUCCESS

    print("Usage: autotrace config [--init|--show]")
    print("  --init  Create a template configuration file")
    print("  --show  Show current configuration")
    return EXIT_SUCCESS


def main(argv: Sequence[str] | None = None) -> int:
    """
    Main entry point for the CLI.

    Args:
        argv: Command-line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code (0=success, 1=error, 2=verification failed)
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return EXIT_RUNTIME_ERROR

    try:
        config = load_config(args.config)
    except Exception as e:
        print(f"Error loading configuration: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    log_level = args.log_level or config.log_level
    setup_logging(level=log_level, log_file=config.log_file)

    # Attach config to args for commands to use
    args.cli_config = config

    try:
        return args.func(args)
    except AutotraceException as e:
        logger.debug("Command failed: %r", e)
        print(f"Error [{e.code}]: {e.message}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR
    except KeyboardInterrupt:
        print("\nInterrupted.", file=sys.stderr)
        return EXIT_RUNTIME_ERROR
    except Exception as e:
        if args.debug:
            traceback.print_exc()
        else:
            print(f"Error: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR


if __name__ == "__main__":
    sys.exit(main())
