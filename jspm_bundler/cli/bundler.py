"""Command-line entry point for bundling and unbundling groups."""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path
from typing import Mapping, Optional, Sequence

from jspm_bundler.bundle.manifest import load_manifest
from jspm_bundler.bundler import Bundler
from jspm_bundler.config import DEFAULT_CONFIG_FILE, BundlerConfig, load_config
from jspm_bundler.errors import BundlerConfigError


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(message)s",
        stream=sys.stderr,
    )

    if args.command == "unbundle" and not args.groups and not args.all:
        parser.error("unbundle requires group names or --all")

    try:
        if args.command == "bundle":
            return _handle_bundle(args)
        if args.command == "unbundle":
            return _handle_unbundle(args)
        if args.command == "manifest":
            if args.manifest_command == "show":
                return _handle_manifest_show(args)
            parser.error("manifest command requires a subcommand")
    except BundlerConfigError as exc:
        _print_json({"error": str(exc)})
        return 2

    parser.error(f"Unknown command '{args.command}'")
    return 1


def _build_parser() -> argparse.ArgumentParser:
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("--project-root", help="Project directory containing package.json.")
    common.add_argument("--config", help=f"Bundler configuration file (default: {DEFAULT_CONFIG_FILE}).")
    common.add_argument("--engine-command", help="Override the bundling engine command template.")
    common.add_argument("--minify", action="store_true", help="Minify bundles whose group does not set minify itself.")
    common.add_argument("--verbose", action="store_true")

    parser = argparse.ArgumentParser(prog="jspm-bundler", description="Build and track jspm bundle groups.")
    subparsers = parser.add_subparsers(dest="command", required=True)

    bundle = subparsers.add_parser("bundle", parents=[common], help="Build bundle groups.")
    bundle.add_argument("groups", nargs="*", help="Groups to build (default: all).")

    unbundle = subparsers.add_parser("unbundle", parents=[common], help="Remove bundle groups from the manifest.")
    unbundle.add_argument("groups", nargs="*", help="Groups to remove.")
    unbundle.add_argument("--all", action="store_true", help="Remove every bundle from the manifest.")

    manifest = subparsers.add_parser("manifest", help="Manifest utilities.")
    manifest_sub = manifest.add_subparsers(dest="manifest_command", required=True)
    manifest_sub.add_parser("show", parents=[common], help="Print the current bundle manifest.")

    return parser


def _handle_bundle(args: argparse.Namespace) -> int:
    bundler = _make_bundler(args, _load(args))
    report = asyncio.run(bundler.bundle(args.groups or None))
    _print_json(report.to_dict())
    return 0 if report.ok else 1


def _handle_unbundle(args: argparse.Namespace) -> int:
    bundler = _make_bundler(args, _load(args))
    groups = None if args.all else args.groups
    report = asyncio.run(bundler.unbundle(groups))
    _print_json(report.to_dict())
    return 0 if report.ok else 1


def _handle_manifest_show(args: argparse.Namespace) -> int:
    bundler = _make_bundler(args, _load(args))
    manifest = load_manifest(bundler.manifest_path)
    payload = {
        "manifest_path": str(bundler.manifest_path),
        "manifest": manifest.model_dump(mode="json"),
    }
    _print_json(payload)
    return 0


def _resolve_workspace(value: Optional[str]) -> Path:
    return Path(value).resolve() if value else Path.cwd()


def _resolve_path(value: str, workspace: Path) -> Path:
    path = Path(value)
    if not path.is_absolute():
        path = workspace / path
    return path.resolve()


def _load(args: argparse.Namespace) -> BundlerConfig:
    workspace = _resolve_workspace(args.project_root)
    config_path = _resolve_path(args.config or DEFAULT_CONFIG_FILE, workspace)
    config = load_config(config_path)
    if args.engine_command:
        config.engine = config.engine.model_copy(update={"command": args.engine_command})
    if args.minify:
        builder = config.options.builder.model_copy(update={"minify": True})
        config.options = config.options.model_copy(update={"builder": builder})
    return config


def _make_bundler(args: argparse.Namespace, config: BundlerConfig) -> Bundler:
    return Bundler.from_config(config, _resolve_workspace(args.project_root))


def _print_json(payload: Mapping[str, object]) -> None:
    print(json.dumps(payload, indent=2, default=str))


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
