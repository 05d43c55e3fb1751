"""Command-line interface for unique-id-core."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import cast

from artifacts import generate_all_artifacts
from artifacts.generators.call_ids import assign_call_ids
from parse.treesitter_calls import extract_call_sites
from rules.config import load_config
from unique_id.errors import UniqueIdError
from unique_id.options import conform_options
from unique_id.session import FileSession
from verify.verify import verify_determinism


def _add_common_paths(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "root",
        nargs="?",
        default=".",
        help="Source tree root (default: .)",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="unique-id")
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log debug output to stderr",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    generate_parser = subparsers.add_parser(
        "generate", help="Generate call ID artifacts"
    )
    _add_common_paths(generate_parser)
    generate_parser.add_argument(
        "--out-dir",
        default=None,
        help="Output directory for generated artifacts (default: config output dir)",
    )

    verify_parser = subparsers.add_parser(
        "verify", help="Verify call ID artifacts are reproducible"
    )
    _add_common_paths(verify_parser)
    verify_parser.add_argument(
        "--artifacts-dir",
        default=None,
        help="Artifacts directory (default: config output dir)",
    )

    show_parser = subparsers.add_parser(
        "show", help="Print the call IDs of a single file"
    )
    show_parser.add_argument("file", help="Python source file")
    show_parser.add_argument("--root-path", default=None, help="Package root")
    show_parser.add_argument(
        "--is-package",
        action="store_true",
        default=None,
        help="Include package name and version in IDs",
    )
    show_parser.add_argument("--package-name", default=None, help="Package name")
    show_parser.add_argument(
        "--package-version", default=None, help="Package version"
    )
    show_parser.add_argument(
        "--id-length", type=int, default=None, help="Length of IDs (default: 8)"
    )

    return parser


def _resolve_output_dir(out_dir: str | None) -> Path | None:
    if out_dir is None:
        return None
    return Path(out_dir).expanduser().resolve()


def _resolve_artifacts_dir(root: Path, artifacts_dir: str | None) -> Path:
    if artifacts_dir is None:
        config = load_config(root)
        return (root / config.output_dir).resolve()
    return Path(artifacts_dir).expanduser().resolve()


def _handle_generate(root: Path, out_dir: str | None) -> int:
    result = generate_all_artifacts(root=root, out_dir=_resolve_output_dir(out_dir))
    for artifact in cast("list[str]", result["artifacts"]):
        sys.stdout.write(f"{artifact}\n")
    return 0


def _handle_verify(root: Path, artifacts_dir: str | None) -> int:
    resolved_artifacts_dir = _resolve_artifacts_dir(root, artifacts_dir)
    try:
        result = verify_determinism(root=root, artifacts_dir=resolved_artifacts_dir)
    except (FileNotFoundError, NotADirectoryError) as exc:
        sys.stderr.write(f"artifacts-dir: {resolved_artifacts_dir}\n")
        sys.stderr.write(f"error: {exc}\n")
        return 2
    if not result.ok:
        for label, paths in (
            ("missing", result.missing),
            ("extra", result.extra),
            ("mismatches", result.mismatches),
            ("changed", result.changed_sources),
        ):
            for path in paths:
                sys.stderr.write(f"{label}: {path}\n")
        return 1
    return 0


def _handle_show(args: argparse.Namespace) -> int:
    file_path = Path(args.file).expanduser().resolve()
    options = conform_options(
        root_path=args.root_path,
        is_package=args.is_package,
        package_name=args.package_name,
        package_version=args.package_version,
        id_length=args.id_length,
        plugin_name="unique-id",
    )

    source_bytes = file_path.read_bytes()
    call_sites = extract_call_sites(source_bytes)
    session = FileSession(
        source_text=source_bytes.decode("utf-8", errors="replace"),
        file_path=str(file_path),
    )
    for call_site, call_id in zip(
        call_sites, assign_call_ids(session, call_sites, options)
    ):
        sys.stdout.write(
            f"{call_site.start_line}:{call_site.start_col}\t"
            f"{call_site.callee_expr}\t{call_id}\n"
        )
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        if args.command == "show":
            return _handle_show(args)

        root = Path(args.root).expanduser().resolve()

        if args.command == "generate":
            return _handle_generate(root, args.out_dir)

        if args.command == "verify":
            return _handle_verify(root, args.artifacts_dir)
    except UniqueIdError as exc:
        sys.stderr.write(f"error: {exc}\n")
        return 2

    raise AssertionError


if __name__ == "__main__":
    raise SystemExit(main())
