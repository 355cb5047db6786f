"""锁文件依赖图解析

模块划分:
- versioning.py: 版本号与版本范围
- models.py: 锁文件数据模型
- reader.py: project.assets.json 读取
- resolver.py: 依赖包查找（精确 + 大小写回退）
- walker.py: 传递依赖遍历
"""

from lockgraph.core.lock.models import (
    DependencySpec,
    Library,
    LockFileModel,
    TargetContext,
    TargetLibrary,
)
from lockgraph.core.lock.reader import load_lock_file, parse_lock_file
from lockgraph.core.lock.resolver import LibraryResolver, resolve
from lockgraph.core.lock.versioning import SemanticVersion, VersionRange
from lockgraph.core.lock.walker import (
    TransitiveDependencyWalker,
    closure,
    unique_libraries,
    walk,
)

__all__ = [
    "SemanticVersion",
    "VersionRange",
    "Library",
    "DependencySpec",
    "TargetLibrary",
    "TargetContext",
    "LockFileModel",
    "load_lock_file",
    "parse_lock_file",
    "LibraryResolver",
    "resolve",
    "TransitiveDependencyWalker",
    "walk",
    "closure",
    "unique_libraries",
]
