"""
CLI for the full registry build.
  python -m registry_builder.orchestration --root components [--config registry.yml] [--json]
"""

import argparse
import json
import logging
from pathlib import Path

from .pipeline import run_pipeline


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        description="Stage alias-rewritten modules and write the barrel index for a registry directory"
    )
    ap.add_argument("--root", "-r", default=".", type=Path, help="Registry root (input directory)")
    ap.add_argument("--config", "-c", type=Path, help="Path to registry.yml (default: <root>/registry.yml)")
    ap.add_argument("--staging-dir", help="Staging subdirectory name (default: staged)")
    ap.add_argument("--index-name", help="Index file name (default: index<extension>)")
    ap.add_argument("--extension", "-e", help="Source extension (default: .ts)")
    ap.add_argument("--no-sort", action="store_true", help="Keep directory listing order instead of sorting")
    ap.add_argument(
        "--rewrite-mode",
        choices=["text", "imports"],
        help="text: replace specifiers everywhere; imports: only inside import declarations",
    )
    ap.add_argument("--json", action="store_true", help="Output result as JSON")
    ap.add_argument("--verbose", "-v", action="store_true", help="Debug logging")
    return ap


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    overrides = {
        "staging_dir": args.staging_dir,
        "index_name": args.index_name,
        "extension": args.extension,
        "rewrite_mode": args.rewrite_mode,
        "sort_modules": False if args.no_sort else None,
    }
    if args.extension and not args.index_name:
        overrides["index_name"] = f"index{args.extension}"

    root = args.root.resolve()
    if args.config is None and not root.is_dir():
        print(f"Error: not a directory: {root}")
        return 1
    result = run_pipeline(root, config_path=args.config, overrides=overrides)

    if args.json:
        print(json.dumps(result.to_dict(), indent=2))
        return 0 if result.ok else 1

    if result.error:
        print(f"Error: {result.error}")
        return 1

    print(f"Staged {len(result.staged)} module(s) into {result.staging_path}")
    for i, name in enumerate(result.staged, 1):
        imports = result.imports.get(name) or []
        print(f"  {i}. {name}" + (f" ({len(imports)} import(s))" if imports else ""))
    print(f"Wrote index: {result.index_path}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
