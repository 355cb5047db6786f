"""传递依赖遍历

从某个目标框架下的包出发，沿依赖声明深度优先（先序）展开，
惰性产出全部可达的已解析包。

约定:
  - 不去重：菱形依赖中的公共包按路径各产出一次
  - 依赖声明在目标框架内按名称精确查找，找不到即抛 TargetLibraryNotFoundError
  - 当前路径上重复出现同一 (名称, 版本) 时抛 CyclicDependencyError
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator

from lockgraph.core.exceptions import CyclicDependencyError
from lockgraph.core.lock.models import (
    DependencySpec,
    Library,
    LockFileModel,
    TargetContext,
    TargetLibrary,
)
from lockgraph.core.lock.resolver import LibraryResolver

logger = logging.getLogger(__name__)


class TransitiveDependencyWalker:
    """传递依赖遍历器，本身无状态，每次 walk() 返回独立的生成器"""

    def __init__(self, resolver: LibraryResolver | None = None) -> None:
        self.resolver = resolver or LibraryResolver()

    def walk(
        self,
        target_library: TargetLibrary,
        model: LockFileModel,
        context: TargetContext,
    ) -> Iterator[Library]:
        # 显式栈代替递归，深依赖链不受解释器递归深度限制
        stack: list[tuple[TargetLibrary, Iterator[DependencySpec]]] = [
            (target_library, iter(target_library.dependencies)),
        ]
        on_path = {target_library.key}

        while stack:
            current, deps = stack[-1]
            dep = next(deps, None)
            if dep is None:
                stack.pop()
                on_path.discard(current.key)
                continue

            child = context.require_library(dep.name)
            if child.key in on_path:
                path = [frame.key for frame, _ in stack]
                path.append(child.key)
                raise CyclicDependencyError(path)

            yield self.resolver.resolve(model, dep.name, dep.version_range)

            stack.append((child, iter(child.dependencies)))
            on_path.add(child.key)


_default_walker = TransitiveDependencyWalker()


def walk(
    target_library: TargetLibrary, model: LockFileModel, context: TargetContext,
) -> Iterator[Library]:
    return _default_walker.walk(target_library, model, context)


def closure(
    model: LockFileModel,
    name: str,
    target: str = "",
    walker: TransitiveDependencyWalker | None = None,
) -> Iterator[Library]:
    """展开目标框架中名为 name 的包的全部传递依赖

    target 为空时使用锁文件的第一个目标框架。
    """
    context = model.get_target(target) if target else model.default_target()
    root = context.require_library(name)
    logger.info(
        "展开传递依赖: %s (target=%s, 直接依赖 %d 个)",
        root, context.name, len(root.dependencies),
    )
    return (walker or _default_walker).walk(root, model, context)


def unique_libraries(libraries: Iterable[Library]) -> list[Library]:
    """按 (名称, 版本) 去重，保留首次出现的顺序"""
    seen: set = set()
    result: list[Library] = []
    for lib in libraries:
        if lib.key in seen:
            continue
        seen.add(lib.key)
        result.append(lib)
    return result
