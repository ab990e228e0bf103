"""Entry point for ClipDeck - handles CLI arg parsing."""

import argparse
import logging
import sys

from dotenv import load_dotenv

from clipdeck import __version__


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="clipdeck",
        description="Browse, filter, and play highlight clips from a clip database",
    )
    parser.add_argument(
        "--api",
        type=str,
        default=None,
        help="Clip endpoint URL the browser loads from",
    )
    parser.add_argument(
        "--config", "-c",
        type=str,
        default=None,
        help="Path to a YAML catalog configuration file",
    )
    parser.add_argument(
        "--serve",
        action="store_true",
        help="Run the read-only clip endpoint instead of the browser",
    )
    parser.add_argument(
        "--host",
        type=str,
        default=None,
        help="Interface the endpoint listens on (with --serve)",
    )
    parser.add_argument(
        "--port", "-p",
        type=int,
        default=None,
        help="Port the endpoint listens on (with --serve, default: 8787)",
    )
    parser.add_argument(
        "--database-url",
        type=str,
        default=None,
        help="SQLAlchemy database URL for the endpoint (with --serve)",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable debug logging",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    return parser.parse_args(argv)


def build_config(args: argparse.Namespace, environ=None):
    """Resolve settings with precedence CLI flags > environment > YAML > defaults."""
    from clipdeck.yaml_config import CatalogConfig, apply_environment, load_catalog_config

    config = load_catalog_config(args.config) if args.config else CatalogConfig()
    apply_environment(config, environ)
    if args.api:
        config.api_endpoint = args.api
    if args.host:
        config.host = args.host
    if args.port is not None:
        config.port = args.port
    if args.database_url:
        config.database_url = args.database_url
    return config


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
    load_dotenv(".env")
    config = build_config(args)

    if args.serve:
        from clipdeck.app import run_server

        return run_server(config)
    else:
        from clipdeck.app import run_gui

        return run_gui(config)


if __name__ == "__main__":
    sys.exit(main())
