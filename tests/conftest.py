"""共享 fixture — 示例 project.assets.json

依赖图 (net45):

    A ──> B ──> D
     └──> C ──> D            菱形依赖
    App ──> NEST (声明 1.9.0，实际解析为 1.9.1) ──> Newtonsoft.Json
    Cyc1 ──> Cyc2 ──> Cyc1   错误的环
"""

from __future__ import annotations

import json
from pathlib import Path

import pytest


def _lib(path: str, **extra) -> dict:
    return {"sha512": f"sha-{path}", "type": "package", "path": path,
            "files": [f"lib/net45/{path.split('/')[0]}.dll"], **extra}


@pytest.fixture()
def assets_data() -> dict:
    return {
        "version": 3,
        "targets": {
            "net45": {
                "A/1.0.0": {"type": "package",
                            "dependencies": {"B": "1.0.0", "C": "1.0.0"}},
                "B/1.0.0": {"type": "package", "dependencies": {"D": "1.0.0"}},
                "C/1.0.0": {"type": "package", "dependencies": {"D": "[1.0.0, )"}},
                "D/1.0.0": {"type": "package"},
                "App/1.0.0": {"type": "project", "dependencies": {"NEST": "1.9.0"}},
                "NEST/1.9.1": {"type": "package",
                               "dependencies": {"Newtonsoft.Json": "9.0.1"}},
                "Newtonsoft.Json/9.0.1": {"type": "package"},
                "Cyc1/1.0.0": {"type": "package", "dependencies": {"Cyc2": "1.0.0"}},
                "Cyc2/1.0.0": {"type": "package", "dependencies": {"Cyc1": "1.0.0"}},
            },
            "netstandard2.0": {
                "A/1.0.0": {"type": "package"},
            },
        },
        "libraries": {
            "A/1.0.0": _lib("a/1.0.0"),
            "B/1.0.0": _lib("b/1.0.0"),
            "C/1.0.0": _lib("c/1.0.0"),
            "D/1.0.0": _lib("d/1.0.0"),
            "App/1.0.0": {"type": "project", "path": "../App/App.csproj"},
            "NEST/1.9.1": _lib("nest/1.9.1"),
            "Newtonsoft.Json/9.0.1": _lib("newtonsoft.json/9.0.1"),
            "Cyc1/1.0.0": _lib("cyc1/1.0.0"),
            "Cyc2/1.0.0": _lib("cyc2/1.0.0"),
        },
    }


@pytest.fixture()
def assets_file(tmp_path: Path, assets_data: dict) -> Path:
    path = tmp_path / "obj" / "project.assets.json"
    path.parent.mkdir(parents=True)
    path.write_text(json.dumps(assets_data, indent=2), encoding="utf-8")
    return path
