"""统一异常体系

所有业务异常继承 LockGraphError，每类异常带有稳定的 code。
CLI 层据此输出 "error <CODE>: <message>"，Web 层据此映射 HTTP 状态码。
解析器与遍历器自身不捕获这些异常，一律抛给调用方。
"""

from __future__ import annotations

from typing import Any


class LockGraphError(Exception):
    """框架基础异常"""

    code: str = "UNKNOWN"

    def __init__(self, message: str) -> None:
        super().__init__(message)


class ConfigError(LockGraphError):
    """配置文件缺失或内容无效"""

    code = "CONFIG_ERROR"


class LockFileError(LockGraphError):
    """锁文件不存在、过大或格式错误"""

    code = "LOCKFILE_ERROR"

    def __init__(self, message: str, path: str = "") -> None:
        super().__init__(f"{path}: {message}" if path else message)
        self.path = path


class VersionFormatError(LockGraphError):
    """版本号或版本范围字符串无法解析"""

    code = "VERSION_FORMAT"

    def __init__(self, text: str, reason: str = "") -> None:
        msg = f"无效的版本字符串: '{text}'"
        if reason:
            msg += f" ({reason})"
        super().__init__(msg)
        self.text = text


class LibraryNotFoundError(LockGraphError):
    """三次查找（精确 / 忽略大小写 / 忽略版本）均未命中"""

    code = "LIBRARY_NOT_FOUND"

    def __init__(self, name: str, version_range: Any) -> None:
        super().__init__(f"锁文件中找不到依赖包: {name} ({version_range})")
        self.name = name
        self.version_range = version_range


class TargetNotFoundError(LockGraphError):
    """锁文件中不存在指定的目标框架"""

    code = "TARGET_NOT_FOUND"

    def __init__(self, name: str, available: list[str] | None = None) -> None:
        self.available = available or []
        super().__init__(
            f"目标框架不存在: '{name}'。可用: {self.available}"
        )
        self.name = name


class TargetLibraryNotFoundError(LockGraphError):
    """依赖声明引用了目标框架中不存在的包，说明锁文件被截断或损坏"""

    code = "TARGET_LIBRARY_NOT_FOUND"

    def __init__(self, name: str, target: str) -> None:
        super().__init__(f"目标框架 '{target}' 中找不到依赖包: {name}")
        self.name = name
        self.target = target


class CyclicDependencyError(LockGraphError):
    """遍历时发现依赖环"""

    code = "CYCLIC_DEPENDENCY"

    def __init__(self, path: list[tuple[str, Any]]) -> None:
        self.path = list(path)
        chain = " -> ".join(f"{n}/{v}" for n, v in self.path)
        super().__init__(f"检测到循环依赖: {chain}")
