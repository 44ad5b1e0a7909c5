import argparse
import sys
from pathlib import Path
from typing import List, Optional

from rs_import.compile import resolve as resolve_unit
from rs_import.data import load_config
from rs_import.env import get_project_root
from rs_import.errors import RsImportError
from rs_import.logging import configure_logging
from rs_import.plugin import RsImport


def _project_root(args: argparse.Namespace) -> Path:
    return args.root.resolve() if args.root else get_project_root()


def build(args: argparse.Namespace) -> int:
    """Build every stale unit declared in the symbol manifest."""
    plugin = RsImport(project_root=_project_root(args))
    results = plugin.setup(force=args.force)
    if not results:
        print("No imports declared in the symbol manifest.")
    for result in results:
        status = "rebuilt" if result.rebuilt else "fresh"
        print(f"{result.unit.slug}: {status}")
    return 0


def resolve(args: argparse.Namespace) -> int:
    """Print the identity and artifact locations of an import."""
    root = _project_root(args)
    config = load_config(root)
    unit = resolve_unit(root, config.output_dir, args.source)
    print(f"- Kind:     {unit.kind.value}")
    print(f"- Name:     {unit.display_name}")
    print(f"- Slug:     {unit.slug}")
    print(f"- Artifact: {unit.artifact_path}")
    print(f"- Hash:     {unit.hash_record_path}")
    return 0


def _add_common_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--root", type=Path, help="Project root. Defaults to $RS_IMPORT_ROOT or the cwd."
    )
    parser.add_argument("--log-level", default=None)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="rs-import",
        description="Compile and cache Rust imports",
        formatter_class=argparse.RawTextHelpFormatter,
    )

    command_subparsers = parser.add_subparsers(
        dest="command", required=True, help="Primary commands"
    )

    build_parser_ = command_subparsers.add_parser(
        "build", help="Rebuild every stale import declared in the symbol manifest."
    )
    _add_common_arguments(build_parser_)
    build_parser_.add_argument(
        "--force", action="store_true", help="Rebuild every import regardless of cache state."
    )
    build_parser_.set_defaults(func=build)

    resolve_parser = command_subparsers.add_parser(
        "resolve", help="Show where an import's artifact and hash record live."
    )
    _add_common_arguments(resolve_parser)
    resolve_parser.add_argument("source", help="A .rs file or Cargo.toml, relative to the root.")
    resolve_parser.set_defaults(func=resolve)

    return parser


def cli(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.log_level)
    try:
        return args.func(args)
    except RsImportError as e:
        print(f"error: {e}", file=sys.stderr)
        return 1


def main() -> None:
    sys.exit(cli())


if __name__ == "__main__":
    main()
