"""vsixproc CLI: inspect and unpack extension packages."""

import argparse
import logging
import sys
from importlib.metadata import version as get_version, PackageNotFoundError
from pathlib import Path
from typing import Optional


def _binary_file_name(metadata) -> str:
    parts = [metadata.namespace or "unknown", ".", metadata.name or "unknown"]
    if metadata.version:
        parts.extend(["-", metadata.version])
    return "".join(parts) + ".vsix"


def _safe_output_path(output_dir: Path, relative: str) -> Optional[Path]:
    """Resolve an archive-supplied path under output_dir, or None if it escapes it."""
    target = (output_dir / relative).resolve()
    root = output_dir.resolve()
    if target == root or root not in target.parents:
        return None
    return target


def _write_result(result, output_dir: Path, quiet: bool) -> None:
    from ._internal.canonical_json import canonical_dumps
    from .kernel.resources import ResourceKind

    output_dir.mkdir(parents=True, exist_ok=True)
    summary_out = output_dir / "summary.json"
    summary_out.write_text(canonical_dumps(result.summary()) + "\n", encoding="utf-8")

    written = 0
    skipped = 0
    for resource in result.resources:
        if resource.kind is ResourceKind.DOWNLOAD:
            relative = _binary_file_name(result.metadata)
        elif resource.kind is ResourceKind.WEB_RESOURCE:
            relative = str(Path("web") / resource.name)
        else:
            relative = str(Path(resource.kind.value) / resource.name)
        target = _safe_output_path(output_dir, relative)
        if target is None:
            skipped += 1
            continue
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_bytes(resource.content)
        written += 1

    if not quiet:
        print("[OK] Extraction complete")
        print(f"  Summary: {summary_out}")
        print(f"  Resources written: {written}")
        if skipped:
            print(f"  Resources skipped (unsafe path): {skipped}")


def main():
    """Main CLI entry point for vsixproc commands."""
    try:
        vsixproc_version = get_version("vsixproc")
    except PackageNotFoundError:
        vsixproc_version = "dev"

    parser = argparse.ArgumentParser(
        prog="vsixproc",
        description="vsixproc: extract metadata and resources from extension packages"
    )
    parser.add_argument("--version", action="version", version=f"vsixproc {vsixproc_version}")
    parent_parser = argparse.ArgumentParser(add_help=False)
    parent_parser.add_argument(
        "--quiet",
        action="store_true",
        help="Suppress all non-error output."
    )
    parent_parser.add_argument(
        "--verbose",
        action="store_true",
        help="Log processing details to stderr."
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    inspect_parser = subparsers.add_parser(
        "inspect",
        help="Process a package and report its metadata and resources",
        parents=[parent_parser]
    )
    inspect_parser.add_argument(
        "package",
        type=Path,
        help="Path to the .vsix package"
    )
    inspect_parser.add_argument(
        "--web",
        action="store_true",
        help="Include web resources for extensions declaring extensionKind 'web'"
    )
    inspect_parser.add_argument(
        "--max-size-mb",
        type=int,
        default=None,
        help="Size ceiling in MiB (defaults to 512)"
    )
    inspect_parser.add_argument(
        "--output-dir",
        type=Path,
        default=None,
        help="Write summary.json and every extracted resource here instead of printing the summary"
    )

    args = parser.parse_args()

    if not args.command:
        parser.print_help()
        sys.exit(1)

    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.command == "inspect":
        # Lazy import: only load the processing kernel when a command runs
        from .api import process_extension
        from .contracts import PublishOptions
        from .kernel.errors import IngestError
        from ._internal.canonical_json import canonical_dumps

        options = PublishOptions(web=args.web)
        if args.max_size_mb is not None:
            if args.max_size_mb <= 0:
                print("Error: --max-size-mb must be positive", file=sys.stderr)
                sys.exit(1)
            options = PublishOptions(web=args.web, max_content_size=args.max_size_mb * 1024 * 1024)

        if not args.package.is_file():
            print(f"Error: Package not found: {args.package}", file=sys.stderr)
            sys.exit(1)

        try:
            with open(args.package, "rb") as stream:
                result = process_extension(stream, options)
        except IngestError as exc:
            print(f"Error [{exc.code.value}]: {exc.message}", file=sys.stderr)
            sys.exit(1)

        if args.output_dir is not None:
            _write_result(result, args.output_dir, args.quiet)
        elif not args.quiet:
            print(canonical_dumps(result.summary()))


if __name__ == "__main__":
    main()
