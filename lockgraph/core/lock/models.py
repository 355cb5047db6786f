"""锁文件数据模型

数据类:
- Library: 全局已解析的包（名称 + 版本 + 安装元数据）
- DependencySpec: 依赖声明（名称 + 版本范围）
- TargetLibrary: 某个目标框架下的包记录及其依赖声明
- TargetContext: 目标框架（如 net45、netcoreapp3.1/win-x64）
- LockFileModel: 完整锁文件

全部为不可变 dataclass：由 reader 一次性构造，之后只读，可被多线程共享。
"""

from __future__ import annotations

from dataclasses import dataclass, field

from lockgraph.core.exceptions import (
    LockFileError,
    TargetLibraryNotFoundError,
    TargetNotFoundError,
)
from lockgraph.core.lock.versioning import SemanticVersion, VersionRange

LibraryKey = tuple[str, SemanticVersion]


@dataclass(frozen=True)
class Library:
    """锁文件 libraries 段中的一个包"""

    name: str
    version: SemanticVersion
    type: str = "package"
    path: str = ""            # 相对包目录的安装路径，如 newtonsoft.json/12.0.1
    sha512: str = ""
    files: tuple[str, ...] = ()

    @property
    def key(self) -> LibraryKey:
        return (self.name, self.version)

    def __str__(self) -> str:
        return f"{self.name}/{self.version}"


@dataclass(frozen=True)
class DependencySpec:
    name: str
    version_range: VersionRange


@dataclass(frozen=True)
class TargetLibrary:
    """目标框架下的包记录"""

    name: str
    version: SemanticVersion
    type: str = "package"
    dependencies: tuple[DependencySpec, ...] = ()

    @property
    def key(self) -> LibraryKey:
        return (self.name, self.version)

    def __str__(self) -> str:
        return f"{self.name}/{self.version}"


@dataclass(frozen=True)
class TargetContext:
    """目标框架，同一框架内每个包名只出现一次"""

    name: str
    libraries: tuple[TargetLibrary, ...] = ()
    _by_name: dict[str, TargetLibrary] = field(
        init=False, repr=False, compare=False, default_factory=dict,
    )

    def __post_init__(self) -> None:
        index = {lib.name: lib for lib in reversed(self.libraries)}
        object.__setattr__(self, "_by_name", index)

    def get_library(self, name: str) -> TargetLibrary | None:
        """按名称精确查找（区分大小写）"""
        return self._by_name.get(name)

    def require_library(self, name: str) -> TargetLibrary:
        lib = self.get_library(name)
        if lib is None:
            raise TargetLibraryNotFoundError(name, self.name)
        return lib


@dataclass(frozen=True)
class LockFileModel:
    """已解析的锁文件"""

    version: int = 3
    libraries: tuple[Library, ...] = ()
    targets: tuple[TargetContext, ...] = ()
    path: str = ""
    _by_key: dict[LibraryKey, Library] = field(
        init=False, repr=False, compare=False, default_factory=dict,
    )

    def __post_init__(self) -> None:
        index = {lib.key: lib for lib in reversed(self.libraries)}
        object.__setattr__(self, "_by_key", index)

    def get_library(self, name: str, version: SemanticVersion) -> Library | None:
        """按 (名称, 版本) 精确查找，名称区分大小写"""
        return self._by_key.get((name, version))

    @property
    def target_names(self) -> list[str]:
        return [t.name for t in self.targets]

    def get_target(self, name: str) -> TargetContext:
        for target in self.targets:
            if target.name == name:
                return target
        raise TargetNotFoundError(name, self.target_names)

    def default_target(self) -> TargetContext:
        if not self.targets:
            raise LockFileError("锁文件中没有任何目标框架", self.path)
        return self.targets[0]
