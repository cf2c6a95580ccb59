"""Command-line interface for buildkeep.

Exposes the cache lifecycle to shell-based build scripts:

    buildkeep restore --workspace $BUILD_DIR --store $CACHE_DIR --runtime-version "$(node --version)"
    ... install dependencies, run the build ...
    buildkeep save --workspace $BUILD_DIR --store $CACHE_DIR --runtime-version "$(node --version)"

Cache misses exit 0; only I/O failures and misconfiguration exit 1.
"""

from __future__ import annotations

import argparse
import logging
from pathlib import Path
import sys

from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape

from buildkeep.core.caching import (
    CacheError,
    CacheLifecycle,
    CacheStatus,
    TransferDirection,
    TransferOutcome,
    TransferReport,
    clear_cache,
    compute_signature,
    get_cache_directories,
    get_cache_status,
    select_directories,
)
from buildkeep.core.config.loader import (
    configure_logging,
    load_app_config,
    load_project_config,
)
from buildkeep.core.config.models import AppConfig, ProjectConfig
from buildkeep.core.io import absolute_path

console = Console()
logger = logging.getLogger(__name__)

_STATUS_STYLE = {
    CacheStatus.VALID: "green",
    CacheStatus.NO_CACHE: "yellow",
    CacheStatus.NEW_VERSION: "yellow",
    CacheStatus.INVALIDATED: "yellow",
}


def _load_app_config(args: argparse.Namespace) -> AppConfig:
    """Load app config and apply the CLI log level on top."""
    app_config = load_app_config(args.app_config)
    if args.log_level:
        logging_config = app_config.logging.model_copy(update={"level": args.log_level})
        app_config = app_config.model_copy(update={"logging": logging_config})
    return app_config


def _project_config(args: argparse.Namespace) -> ProjectConfig:
    """Build project config from the workspace manifest and toolchain versions."""
    if getattr(args, "runtime_version", None) is None:
        # Listing directories does not depend on the toolchain
        signature = "unknown"
    else:
        signature = compute_signature(args.runtime_version, args.package_manager_version)
    manifest = Path(args.manifest) if args.manifest else Path(args.workspace)
    return load_project_config(manifest.absolute(), signature)


def _print_transfer(report: TransferReport) -> None:
    for record in report.records:
        if record.outcome is TransferOutcome.DUPLICATE:
            continue
        if record.outcome is TransferOutcome.COPIED:
            console.print(f"  - {escape(record.path)} [dim]({record.files_copied} files)[/dim]")
        elif report.direction is TransferDirection.RESTORE:
            console.print(f"  - {escape(record.path)} [dim](not cached - skipping)[/dim]")
        else:
            console.print(f"  - {escape(record.path)} [dim](nothing to cache)[/dim]")


def cmd_status(args: argparse.Namespace, app_config: AppConfig) -> int:
    """Print the cache status for this build."""
    report = get_cache_status(
        Path(args.store).absolute(), _project_config(args), app_config.cache
    )

    if args.json:
        console.print_json(report.model_dump_json())
        return 0

    style = _STATUS_STYLE[report.status]
    console.print(f"[{style}]{report.status.value}[/{style}] {escape(report.reason)}")
    return 0


def cmd_dirs(args: argparse.Namespace, app_config: AppConfig) -> int:
    """Print the cache directories, one per line."""
    config = _project_config(args)
    directories = get_cache_directories(config) if args.configured else select_directories(config)
    for path in directories:
        console.print(path, markup=False, highlight=False, soft_wrap=True)
    return 0


def cmd_restore(args: argparse.Namespace, app_config: AppConfig) -> int:
    """Run the pre-build lifecycle step."""
    lifecycle = CacheLifecycle(settings=app_config.cache)
    result = lifecycle.before_build(
        absolute_path(Path(args.workspace).absolute()),
        absolute_path(Path(args.store).absolute()),
        _project_config(args),
    )

    if args.json:
        console.print_json(result.model_dump_json())
        return 0

    console.print("[bold]Restoring cache[/bold]")
    if result.restore is None:
        reason = escape(result.status.reason)
        console.print(f"  [yellow]Skipping cache restore[/yellow] ({reason})")
    else:
        _print_transfer(result.restore)
    return 0


def cmd_save(args: argparse.Namespace, app_config: AppConfig) -> int:
    """Run the post-build lifecycle step."""
    lifecycle = CacheLifecycle(settings=app_config.cache)
    result = lifecycle.after_build(
        absolute_path(Path(args.workspace).absolute()),
        absolute_path(Path(args.store).absolute()),
        _project_config(args),
    )

    if args.json:
        console.print_json(result.model_dump_json())
        return 0

    console.print("[bold]Caching build[/bold]")
    if result.save is None:
        console.print("  [yellow]Skipping cache save[/yellow] (disabled by configuration)")
    else:
        _print_transfer(result.save)
        console.print(f"  [green]Signature:[/green] {result.signature}")
    return 0


def cmd_clear(args: argparse.Namespace, app_config: AppConfig) -> int:
    """Empty the cache store."""
    clear_cache(Path(args.store).absolute(), app_config.cache)
    console.print("[green]Cache cleared[/green]")
    return 0


def _add_common(
    p: argparse.ArgumentParser, store: bool = True, project: bool = True, versions: bool = True
) -> None:
    if store:
        p.add_argument("--store", required=True, help="Cache store location")
    p.add_argument(
        "--app-config",
        default=None,
        help="Path to app config (.json/.yaml, default: buildkeep.yaml if present)",
    )
    p.add_argument(
        "--log-level",
        default=None,
        type=str.upper,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Override logging level",
    )
    if project:
        p.add_argument("--workspace", default=".", help="Build workspace (default: current dir)")
        p.add_argument(
            "--manifest",
            default=None,
            help="Path to package.json (default: <workspace>/package.json)",
        )
    if versions:
        p.add_argument(
            "--runtime-version", required=True, help="Installed runtime version (e.g. v18.17.0)"
        )
        p.add_argument(
            "--package-manager-version",
            default=None,
            help="Installed package manager version (part of the signature)",
        )
        p.add_argument("--json", action="store_true", help="Print the result as JSON")


def build_arg_parser() -> argparse.ArgumentParser:
    """Build argument parser for CLI."""
    p = argparse.ArgumentParser(
        prog="buildkeep",
        description="buildkeep - signature-validated build directory cache",
    )
    sub = p.add_subparsers(dest="cmd", required=True)

    status = sub.add_parser("status", help="Show whether the cache can be restored")
    _add_common(status)
    status.set_defaults(handler=cmd_status)

    dirs = sub.add_parser("dirs", help="List the directories that will be cached")
    _add_common(dirs, store=False, versions=False)
    dirs.add_argument(
        "--configured",
        action="store_true",
        help="Only list configured directories (empty when the default applies)",
    )
    dirs.set_defaults(handler=cmd_dirs)

    restore = sub.add_parser("restore", help="Restore cached directories (before build)")
    _add_common(restore)
    restore.set_defaults(handler=cmd_restore)

    save = sub.add_parser("save", help="Clear the store and save directories (after build)")
    _add_common(save)
    save.set_defaults(handler=cmd_save)

    clear = sub.add_parser("clear", help="Empty the cache store")
    _add_common(clear, project=False, versions=False)
    clear.set_defaults(handler=cmd_clear)

    return p


def main(argv: list[str] | None = None) -> int:
    """Main entry point for CLI.

    Returns:
        Exit code (0 for success, 1 for failure)
    """
    p = build_arg_parser()
    args = p.parse_args(argv)

    try:
        app_config = _load_app_config(args)
    except (OSError, ValueError) as e:
        # ValidationError is a ValueError
        console.print(f"[red]ERROR: Could not load config: {escape(str(e))}[/red]")
        return 1

    configure_logging(app_config)

    try:
        return args.handler(args, app_config)
    except CacheError as e:
        console.print(f"[red]ERROR: {escape(str(e))}[/red]")
        return 1
    except ValidationError as e:
        console.print(f"[red]ERROR: Invalid project configuration: {escape(str(e))}[/red]")
        return 1
    except ValueError as e:
        console.print(f"[red]ERROR: {escape(str(e))}[/red]")
        return 1
    except OSError as e:
        logger.debug("Cache I/O failure", exc_info=True)
        console.print(f"[red]ERROR: {escape(str(e))}[/red]")
        return 1


if __name__ == "__main__":
    sys.exit(main())
