"""锁文件读取

将 NuGet 还原生成的 project.assets.json 解析为 LockFileModel:

    {
      "version": 3,
      "targets": {
        "net45": {
          "NEST/1.9.1": {"type": "package", "dependencies": {"Newtonsoft.Json": "9.0.1"}}
        }
      },
      "libraries": {
        "NEST/1.9.1": {"sha512": "...", "type": "package", "path": "nest/1.9.1", "files": [...]}
      }
    }

格式错误统一转为 LockFileError，原始异常保留在 __cause__ 中。
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from lockgraph.core.exceptions import LockFileError, VersionFormatError
from lockgraph.core.lock.models import (
    DependencySpec,
    Library,
    LockFileModel,
    TargetContext,
    TargetLibrary,
)
from lockgraph.core.lock.versioning import SemanticVersion, VersionRange

logger = logging.getLogger(__name__)

# 锁文件最大大小限制 (64MB)
MAX_LOCK_FILE_SIZE = 64 * 1024 * 1024


def load_lock_file(path: str | Path) -> LockFileModel:
    """读取并解析锁文件"""
    p = Path(path)
    if not p.is_file():
        raise LockFileError("锁文件不存在", str(p))

    file_size = p.stat().st_size
    if file_size > MAX_LOCK_FILE_SIZE:
        raise LockFileError(
            f"锁文件过大 ({file_size} 字节), 超过限制 {MAX_LOCK_FILE_SIZE} 字节",
            str(p),
        )

    try:
        with open(p, encoding="utf-8-sig") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise LockFileError(f"JSON 格式错误: {e}", str(p)) from e
    except UnicodeDecodeError as e:
        raise LockFileError(f"文件不是有效的 UTF-8 编码: {e}", str(p)) from e
    except OSError as e:
        raise LockFileError(f"读取失败: {e}", str(p)) from e

    model = parse_lock_file(data, path=str(p))
    logger.info(
        "已加载锁文件 %s: %d 个包, %d 个目标框架",
        p, len(model.libraries), len(model.targets),
    )
    return model


def parse_lock_file(data: Any, path: str = "") -> LockFileModel:
    """将已反序列化的 JSON 对象转换为 LockFileModel"""
    if not isinstance(data, dict):
        raise LockFileError("顶层内容必须是对象", path)

    try:
        libraries = _parse_libraries(_section(data, "libraries"))
        targets = tuple(
            _parse_target(name, entries)
            for name, entries in _section(data, "targets").items()
        )
    except VersionFormatError as e:
        raise LockFileError(str(e), path) from e
    except (TypeError, ValueError) as e:
        raise LockFileError(f"格式错误: {e}", path) from e

    version = data.get("version", 3)
    if not isinstance(version, int):
        raise LockFileError(f"version 必须是整数: {version!r}", path)

    return LockFileModel(
        version=version, libraries=libraries, targets=targets, path=path,
    )


def _section(data: dict[str, Any], key: str) -> dict[str, Any]:
    section = data.get(key)
    if section is None:
        return {}
    if not isinstance(section, dict):
        raise TypeError(f"'{key}' 段必须是对象")
    return section


def _split_key(key: str) -> tuple[str, SemanticVersion]:
    """'Name/1.0.0' -> ('Name', SemanticVersion)"""
    name, sep, version = key.rpartition("/")
    if not sep or not name:
        raise ValueError(f"包标识必须为 '名称/版本' 形式: '{key}'")
    return name, SemanticVersion.parse(version)


def _parse_libraries(section: dict[str, Any]) -> tuple[Library, ...]:
    """逐个解析 libraries 段，(名称, 版本) 重复时报错

    "A/1.0" 与 "A/1.0.0" 是不同的 JSON 键，但版本相等，视为重复。
    """
    seen: dict = {}
    libraries = []
    for key, info in section.items():
        lib = _parse_library(key, info)
        if lib.key in seen:
            raise ValueError(f"重复的包: '{seen[lib.key]}' 与 '{key}'")
        seen[lib.key] = key
        libraries.append(lib)
    return tuple(libraries)


def _parse_library(key: str, info: Any) -> Library:
    name, version = _split_key(key)
    if info is None:
        info = {}
    if not isinstance(info, dict):
        raise TypeError(f"包 '{key}' 的内容必须是对象")
    return Library(
        name=name,
        version=version,
        type=info.get("type", "package"),
        path=info.get("path", ""),
        sha512=info.get("sha512", ""),
        files=tuple(info.get("files") or ()),
    )


def _parse_target(name: str, entries: Any) -> TargetContext:
    if entries is None:
        entries = {}
    if not isinstance(entries, dict):
        raise TypeError(f"目标框架 '{name}' 的内容必须是对象")

    libraries = []
    for key, info in entries.items():
        lib_name, version = _split_key(key)
        if info is None:
            info = {}
        if not isinstance(info, dict):
            raise TypeError(f"目标框架 '{name}' 中 '{key}' 的内容必须是对象")
        deps = info.get("dependencies")
        if deps is None:
            deps = {}
        if not isinstance(deps, dict):
            raise TypeError(f"'{key}' 的 dependencies 必须是对象")
        libraries.append(TargetLibrary(
            name=lib_name,
            version=version,
            type=info.get("type", "package"),
            dependencies=tuple(
                DependencySpec(dep_name, VersionRange.parse(dep_range))
                for dep_name, dep_range in deps.items()
            ),
        ))
    return TargetContext(name=name, libraries=tuple(libraries))
