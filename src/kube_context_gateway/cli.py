"""Command-line entry point for the gateway."""

from __future__ import annotations

import argparse
import dataclasses
import logging

import structlog
import uvicorn

from kube_context_gateway.config import GatewayConfig, get_config

_LOG_LEVELS = ["debug", "info", "warning", "error"]


def build_parser(defaults: GatewayConfig) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="kube-context-gateway",
        description="Serve read-only pod, log, and namespace queries for any kubeconfig context over HTTP.",
    )
    parser.add_argument(
        "--kubeconfig",
        default=defaults.kubeconfig_path,
        help="(optional) absolute path to the kubeconfig file"
        if defaults.kubeconfig_path
        else "absolute path to the kubeconfig file",
    )
    parser.add_argument("--host", default=defaults.host, help="Interface to bind")
    parser.add_argument("--port", type=int, default=defaults.port, help="Port to listen on")
    parser.add_argument("--log-level", choices=_LOG_LEVELS, default="info", help="Minimum log level")
    return parser


def config_from_args(argv: list[str] | None = None) -> tuple[GatewayConfig, str]:
    """Parse CLI arguments on top of environment-derived configuration."""
    defaults = get_config()
    args = build_parser(defaults).parse_args(argv)
    config = dataclasses.replace(defaults, kubeconfig_path=args.kubeconfig, host=args.host, port=args.port)
    return config, args.log_level


def main(argv: list[str] | None = None) -> None:
    config, log_level = config_from_args(argv)
    structlog.configure(wrapper_class=structlog.make_filtering_bound_logger(getattr(logging, log_level.upper())))

    from kube_context_gateway.server import create_app

    structlog.get_logger().info("starting_server", host=config.host, port=config.port)
    uvicorn.run(create_app(config), host=config.host, port=config.port, log_level=log_level)
