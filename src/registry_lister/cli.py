"""CLI for Registry Lister."""

import argparse
import logging
import os
import sys
from collections.abc import Callable, Iterable, Sequence
from pathlib import Path
from typing import Any, TextIO

import pydantic
import structlog
import yaml

from .config import ListerConfig
from .exceptions import RegistryError
from .factory import Factory
from .models.registry import Registry

# Settings that a command-line flag may override.
_OVERRIDES = ("registry", "username", "password", "password_file", "page_size")


def _env_flag(name: str) -> bool:
    return os.getenv(name, "").lower() in ("1", "true", "yes")


def _build_parser(description: str) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description=description)
    parser.add_argument(
        "-c",
        "--config-file",
        type=Path,
        help="lister config file (YAML); flags override its settings",
        default=os.getenv("CONFIG_FILE") or None,
    )
    parser.add_argument(
        "-r",
        "--registry",
        help="registry host, or 'docker.io' for Docker Hub",
        default=os.getenv("REGISTRY"),
    )
    parser.add_argument(
        "-u",
        "--username",
        help="username",
        default=os.getenv("USERNAME"),
    )
    parser.add_argument(
        "-p",
        "--password",
        help="password",
        default=os.getenv("PASSWORD"),
    )
    parser.add_argument(
        "--password-file",
        type=Path,
        help="read password from this file",
        default=os.getenv("PASSWORD_FILE") or None,
    )
    parser.add_argument(
        "--credentials-from-docker-config",
        action="store_true",
        help="read username and password from ~/.docker/config.json",
        default=_env_flag("CREDENTIALS_FROM_DOCKER_CONFIG"),
    )
    parser.add_argument(
        "--page-size",
        type=int,
        help="number of entries to request per page",
        default=os.getenv("PAGE_SIZE") or None,
    )
    parser.add_argument(
        "-d",
        "--debug",
        action="store_true",
        help="Enable debug logging",
        default=_env_flag("DEBUG"),
    )
    return parser


def _load_config(
    parser: argparse.ArgumentParser, args: argparse.Namespace
) -> ListerConfig:
    settings: dict[str, Any] = {}
    if args.config_file:
        try:
            file_config = ListerConfig.from_file(args.config_file)
        except (OSError, yaml.YAMLError, pydantic.ValidationError) as exc:
            parser.error(f"cannot load config file {args.config_file}: {exc}")
        settings = file_config.model_dump(exclude_unset=True)
    # Override settings in config with anything given on the command line.
    for key in _OVERRIDES:
        value = getattr(args, key)
        if value is not None and value != "":
            settings[key] = value
    if args.credentials_from_docker_config:
        settings["credentials_from_docker_config"] = True
    if args.debug:
        settings["debug"] = True
    try:
        return ListerConfig.model_validate(settings)
    except pydantic.ValidationError as exc:
        parser.error(str(exc))


def _configure_logging(debug: bool) -> None:
    log_level = logging.DEBUG if debug else logging.INFO
    structlog.configure(
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
    )


def _write(items: Iterable[str], writer: TextIO) -> None:
    for item in items:
        writer.write(f"{item}\n")


def _run(
    parser: argparse.ArgumentParser,
    args: argparse.Namespace,
    list_items: Callable[[Factory, Registry], Iterable[str]],
    writer: TextIO,
) -> int:
    cfg = _load_config(parser, args)
    _configure_logging(cfg.debug)
    logger = structlog.get_logger(__name__)
    try:
        registry = cfg.build_registry()
        logger.debug(
            f"Using registry {registry.name} as '{registry.username}'"
        )
        registry.validate_registry()
        with Factory.standalone(cfg) as factory:
            items = list_items(factory, registry)
    except RegistryError as exc:
        logger.error(f"{type(exc).__name__}: {exc}")
        return 1
    _write(items, writer)
    return 0


def list_repositories(
    argv: Sequence[str] | None = None, writer: TextIO = sys.stdout
) -> int:
    """List the repositories of a registry, one per line."""
    parser = _build_parser("List repositories in a container registry.")
    args = parser.parse_args(argv)
    return _run(
        parser,
        args,
        lambda factory, registry: factory.repositories().list(registry),
        writer,
    )


def list_tags(
    argv: Sequence[str] | None = None, writer: TextIO = sys.stdout
) -> int:
    """List the tags of one repository, one per line."""
    parser = _build_parser(
        "List tags of a repository in a container registry."
    )
    parser.add_argument(
        "-n",
        "--repository",
        help="repository whose tags to list",
        default=os.getenv("REPOSITORY"),
    )
    args = parser.parse_args(argv)
    if not args.repository:
        parser.error("a repository is required")
    return _run(
        parser,
        args,
        lambda factory, registry: factory.tags().list(
            registry, args.repository
        ),
        writer,
    )


def repositories_main() -> None:
    sys.exit(list_repositories())


def tags_main() -> None:
    sys.exit(list_tags())
