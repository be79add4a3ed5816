"""
Command line entry point running the gateway under uvicorn.
"""

import argparse
import logging
import os
import sys
from collections.abc import Callable

import uvicorn
from fastapi import FastAPI

from cli_commander.core.app.application_factory import build_app
from cli_commander.core.common.exceptions import ConfigurationError
from cli_commander.core.common.logging_utils import (
    configure_logging_with_environment_tagging,
)
from cli_commander.core.common.uvicorn_logging import UVICORN_LOGGING_CONFIG
from cli_commander.core.config.app_config import AppConfig, LogLevel, load_config


def build_cli_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Run the CLI Commander server")
    parser.add_argument("--host", dest="host", default=None, help="Host to bind to")
    parser.add_argument(
        "--port", dest="port", type=int, default=None, help="Port to listen on"
    )
    parser.add_argument(
        "--config",
        dest="config_file",
        default=None,
        metavar="PATH",
        help="YAML configuration file",
    )
    parser.add_argument(
        "--disable-auth",
        dest="disable_auth",
        action="store_true",
        default=None,
        help="Treat every caller as anonymous (forces host=127.0.0.1)",
    )
    parser.add_argument(
        "--deny",
        dest="denied_commands",
        action="append",
        default=None,
        metavar="COMMAND",
        help="Refuse to run COMMAND; replaces the configured denylist (repeatable)",
    )
    parser.add_argument(
        "--log-level",
        dest="log_level",
        choices=[level.value for level in LogLevel],
        default=None,
        help="Logging level",
    )
    parser.add_argument(
        "--log", dest="log_file", default=None, metavar="FILE", help="Log file path"
    )
    parser.add_argument(
        "--allow-admin",
        dest="allow_admin",
        action="store_true",
        default=False,
        help="Allow running with elevated privileges",
    )
    return parser


def parse_cli_args(argv: list[str] | None = None) -> argparse.Namespace:
    return build_cli_parser().parse_args(argv)


def apply_cli_args(args: argparse.Namespace) -> AppConfig:
    """Load configuration and apply command line overrides on top of it."""
    cfg = load_config(args.config_file)
    if args.host is not None:
        cfg.host = args.host
    if args.port is not None:
        cfg.port = args.port
    if args.disable_auth:
        cfg.auth.disable_auth = True
    if args.denied_commands is not None:
        cfg.policy.denied_commands = [c.strip() for c in args.denied_commands if c.strip()]
    if args.log_level is not None:
        cfg.logging.level = LogLevel(args.log_level)
    if args.log_file is not None:
        cfg.logging.log_file = args.log_file
    return cfg


def _check_privileges() -> None:
    """Refuse to run the server with elevated privileges."""
    if os.name != "nt" and hasattr(os, "geteuid") and os.geteuid() == 0:
        raise SystemExit("Refusing to run as root user")


def _configure_logging(cfg: AppConfig) -> None:
    configure_logging_with_environment_tagging(
        level=getattr(logging, cfg.logging.level.value),
        log_file=cfg.logging.log_file,
        api_keys=cfg.auth.api_keys,
    )


def _enforce_localhost_if_auth_disabled(cfg: AppConfig) -> None:
    """Enforce localhost binding when authentication is disabled."""
    if not cfg.auth.disable_auth:
        return
    logging.warning("Client authentication is DISABLED")
    if cfg.host != "127.0.0.1":
        logging.warning(
            "Authentication disabled but host is %s. Forcing host to 127.0.0.1 for security.",
            cfg.host,
        )
        cfg.host = "127.0.0.1"


def main(
    argv: list[str] | None = None,
    build_app_fn: Callable[[AppConfig], FastAPI] | None = None,
) -> None:
    args = parse_cli_args(argv)
    try:
        cfg = apply_cli_args(args)
    except ConfigurationError as e:
        sys.stderr.write(f"\nERROR: {e.message}\n")
        sys.exit(1)

    _configure_logging(cfg)

    if not args.allow_admin:
        _check_privileges()

    _enforce_localhost_if_auth_disabled(cfg)

    app = build_app_fn(cfg) if build_app_fn else build_app(cfg)

    logging.info(f"Starting uvicorn on {cfg.host}:{cfg.port}")
    uvicorn.run(
        app, host=cfg.host, port=cfg.port, log_config=UVICORN_LOGGING_CONFIG
    )


if __name__ == "__main__":
    main()
