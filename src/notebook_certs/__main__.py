"""Command line entry point: ``notebook-certs`` / ``python -m notebook_certs``."""
from __future__ import annotations

import argparse
import logging
import sys
from typing import Sequence

import requests
from dotenv import load_dotenv

from notebook_certs import __version__
from notebook_certs.config import ConfigurationError, reload_settings
from notebook_certs.download import DownloadError, download
from notebook_certs.logging_setup import configure_logging
from notebook_certs.tls import CertBundleResolver

LOGGER = logging.getLogger("notebook_certs.cli")


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="notebook-certs",
        description="Resolve the CA bundle used for HTTPS downloads in the example notebooks.",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument(
        "--log-level",
        default=None,
        help="Minimum log level (trace, debug, info, warning, error). "
        "Defaults to NOTEBOOK_CERTS_LOG_LEVEL or INFO.",
    )
    subcommands = parser.add_subparsers(dest="command", required=True)

    subcommands.add_parser("where", help="Print the verify value requests will use and its source.")

    fetch_parser = subcommands.add_parser("fetch", help="Download a URL using the resolved CA bundle.")
    fetch_parser.add_argument("url")
    fetch_parser.add_argument(
        "-o",
        "--output",
        default=".",
        help="Destination file or directory (default: current directory).",
    )
    return parser


def _cmd_where() -> int:
    print(CertBundleResolver().describe())
    return 0


def _cmd_fetch(url: str, output: str) -> int:
    try:
        path = download(url, output)
    except requests.exceptions.SSLError as exc:
        print(f"TLS verification failed: {exc}", file=sys.stderr)
        return 1
    except DownloadError as exc:
        print(str(exc), file=sys.stderr)
        return 1
    print(path)
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)

    load_dotenv()
    configure_logging(level=args.log_level, notebook=False)

    try:
        reload_settings()
    except ConfigurationError as exc:
        print(str(exc), file=sys.stderr)
        return 2

    LOGGER.debug("Running %s", args.command)
    if args.command == "where":
        return _cmd_where()
    return _cmd_fetch(args.url, args.output)


if __name__ == "__main__":  # pragma: no cover - exercised via the console script
    sys.exit(main())
