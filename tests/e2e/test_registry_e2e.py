"""
End-to-end tests: build a registry from a directory of modules and check the
staged files and barrel index on disk.
Tests cover:
- The button/icons example
- Idempotence across runs
- Removal of leftovers from earlier runs
- Empty input
- Parse failure
- CLI entry points
"""
import json
from pathlib import Path

from registry_builder.orchestration import RunState, run_pipeline
from registry_builder.orchestration.__main__ import main as build_main
from registry_builder.parser.__main__ import main as inspect_main


def snapshot(root: Path) -> dict[str, bytes]:
    files = {p.relative_to(root).as_posix(): p.read_bytes() for p in (root / "staged").rglob("*") if p.is_file()}
    files["index.ts"] = (root / "index.ts").read_bytes()
    return files


class TestButtonIconsExample:
    def test_staged_output(self, registry):
        result = run_pipeline(registry)

        assert result.state is RunState.DONE
        assert (registry / "staged" / "button.ts").read_text() == (
            'import { Icon } from "_icons";\n'
            'import * as React from "_react";\n'
            "\n"
            "// wraps _icons in a button\n"
            'export const Button = () => React.createElement("button", null, Icon);\n'
        )
        assert (registry / "staged" / "icons.ts").read_text() == (registry / "icons.ts").read_text()
        assert (registry / "index.ts").read_text() == (
            "export * from './staged/button';\n"
            "export * from './staged/icons';\n"
        )

    def test_inputs_untouched(self, registry):
        before = (registry / "button.ts").read_bytes()
        run_pipeline(registry)
        assert (registry / "button.ts").read_bytes() == before


class TestRunProperties:
    def test_idempotent(self, registry):
        run_pipeline(registry)
        first = snapshot(registry)
        run_pipeline(registry)
        assert snapshot(registry) == first

    def test_one_file_per_module_and_no_leftovers(self, registry):
        stale = registry / "staged"
        stale.mkdir()
        (stale / "removed.ts").write_text("export {};\n")
        run_pipeline(registry)
        assert sorted(p.name for p in stale.iterdir()) == ["button.ts", "icons.ts"]

    def test_deleted_module_disappears_on_next_run(self, registry):
        run_pipeline(registry)
        (registry / "icons.ts").unlink()
        run_pipeline(registry)
        assert sorted(p.name for p in (registry / "staged").iterdir()) == ["button.ts"]
        assert (registry / "index.ts").read_text() == "export * from './staged/button';\n"

    def test_empty_input(self, tmp_path):
        result = run_pipeline(tmp_path)
        assert result.ok
        assert result.staged == []
        assert list((tmp_path / "staged").iterdir()) == []
        assert (tmp_path / "index.ts").read_text() == ""

    def test_parse_failure_does_not_write_index(self, registry, write_module):
        write_module("broken.ts", "export const = ;\n")
        result = run_pipeline(registry)
        assert result.state is RunState.ABORTED
        assert "broken.ts" in result.error
        assert not (registry / "index.ts").exists()


class TestCli:
    def test_build_json(self, registry, capsys):
        code = build_main(["--root", str(registry), "--json"])
        out = json.loads(capsys.readouterr().out)
        assert code == 0
        assert out["state"] == "done"
        assert out["staged"] == ["button.ts", "icons.ts"]

    def test_build_text(self, registry, capsys):
        assert build_main(["--root", str(registry)]) == 0
        out = capsys.readouterr().out
        assert "Staged 2 module(s)" in out
        assert "1. button.ts (2 import(s))" in out

    def test_build_failure_exit_code(self, tmp_path, write_module, capsys):
        write_module("bad.ts", "const = ;\n")
        assert build_main(["--root", str(tmp_path)]) == 1
        assert "Error:" in capsys.readouterr().out

    def test_build_missing_root(self, tmp_path, capsys):
        assert build_main(["--root", str(tmp_path / "nope")]) == 1

    def test_build_unreadable_config_exit_code(self, registry, capsys):
        config_dir = registry / "cfg.yml"
        config_dir.mkdir()
        (config_dir / "x").write_text("")
        assert build_main(["--root", str(registry), "--config", str(config_dir)]) == 1
        assert "Error: Invalid configuration" in capsys.readouterr().out

    def test_extension_flag_derives_index_name(self, tmp_path, write_module):
        write_module("view.tsx", 'import * as React from "react";\nexport const V = () => <div />;\n')
        assert build_main(["--root", str(tmp_path), "--extension", ".tsx"]) == 0
        assert (tmp_path / "index.tsx").read_text() == "export * from './staged/view';\n"
        assert 'from "_react"' in (tmp_path / "staged" / "view.tsx").read_text()

    def test_inspect_json(self, registry, capsys):
        assert inspect_main(["--root", str(registry), "--json"]) == 0
        out = json.loads(capsys.readouterr().out)
        assert out["modules"][0] == {
            "module": "button.ts",
            "imports": [
                {"specifier": "./icons", "alias": "_icons"},
                {"specifier": "react", "alias": "_react"},
            ],
        }
        assert not (registry / "staged").exists()
