"""Shared fixtures for registry tests."""
from pathlib import Path

import pytest

from registry_builder.config import RegistryConfig

BUTTON_TS = '''import { Icon } from "./icons";
import * as React from "react";

// wraps ./icons in a button
export const Button = () => React.createElement("button", null, Icon);
'''

ICONS_TS = '''export const Icon = "icon";
'''


@pytest.fixture
def write_module(tmp_path):
    """Write a file into the registry root and return its path."""
    def _write(name: str, content: str) -> Path:
        path = tmp_path / name
        path.write_text(content, encoding="utf-8")
        return path
    return _write


@pytest.fixture
def registry(tmp_path, write_module):
    """Registry root holding button.ts and icons.ts."""
    write_module("button.ts", BUTTON_TS)
    write_module("icons.ts", ICONS_TS)
    return tmp_path


@pytest.fixture
def config(tmp_path):
    return RegistryConfig(source_dir=tmp_path)
