"""
CLI to inspect a registry directory without writing anything.
  python -m registry_builder.parser --root components [--json]
"""

import argparse
import json
from pathlib import Path

from registry_builder.errors import RegistryError
from registry_builder.rewriter import alias_for

from .imports import extract_imports
from .scanner import read_module, scan_modules


def main(argv: list[str] | None = None) -> int:
    ap = argparse.ArgumentParser(description="List registry modules and the imports they reference")
    ap.add_argument("--root", "-r", default=".", help="Registry root directory")
    ap.add_argument("--extension", "-e", default=".ts", help="Source extension")
    ap.add_argument("--index-name", help="Index file to skip (default: index<extension>)")
    ap.add_argument("--no-sort", action="store_true", help="Keep directory listing order")
    ap.add_argument("--json", action="store_true", help="Print JSON instead of text")
    args = ap.parse_args(argv)

    root = Path(args.root).resolve()
    index_name = args.index_name or f"index{args.extension}"
    modules = []
    try:
        for path in scan_modules(root, args.extension, index_name, sort=not args.no_sort):
            module = read_module(path)
            modules.append(
                {
                    "module": module.name,
                    "imports": [
                        {"specifier": s, "alias": alias_for(s)}
                        for s in extract_imports(module.content, module.path)
                    ],
                }
            )
    except RegistryError as e:
        print(f"Error: {e}")
        return 1

    if args.json:
        print(json.dumps({"root": str(root), "modules": modules}, indent=2))
        return 0

    print(f"{root} ({len(modules)} module(s))")
    for m in modules:
        print(f"- {m['module']}")
        for imp in m["imports"]:
            print(f"    {imp['specifier']} -> {imp['alias']}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
