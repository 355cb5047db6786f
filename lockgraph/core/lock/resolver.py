"""锁文件依赖包查找

职责:
- 根据依赖声明 (名称 + 版本范围) 在锁文件 libraries 段中找到已解析的包
- 处理依赖声明与实际解析结果大小写不一致的情况

背景:
  锁文件按名称精确索引，但上游还原过程可能以不同的大小写声明同一个包；
  另外近似匹配（声明 1.9.0，实际解析为 1.9.1）会让版本对不上。
  锁文件中同一个包名（忽略大小写）只保留一个已解析版本，
  所以最后一步可以直接取忽略大小写的第一个同名包。
"""

from __future__ import annotations

import logging
from collections.abc import Callable

from lockgraph.core.exceptions import LibraryNotFoundError
from lockgraph.core.lock.models import Library, LockFileModel
from lockgraph.core.lock.versioning import VersionRange

logger = logging.getLogger(__name__)

LookupStrategy = Callable[[LockFileModel, str, VersionRange], "Library | None"]


def exact_match(model: LockFileModel, name: str, version_range: VersionRange) -> Library | None:
    """名称区分大小写 + 版本等于范围下界"""
    if version_range.min_version is None:
        return None
    return model.get_library(name, version_range.min_version)


def case_insensitive_match(
    model: LockFileModel, name: str, version_range: VersionRange,
) -> Library | None:
    """名称忽略大小写 + 版本等于范围下界"""
    if version_range.min_version is None:
        return None
    folded = name.lower()
    for lib in model.libraries:
        if lib.name.lower() == folded and lib.version == version_range.min_version:
            return lib
    return None


def name_only_match(
    model: LockFileModel, name: str, version_range: VersionRange,  # noqa: ARG001
) -> Library | None:
    """名称忽略大小写，不看版本，取第一个"""
    folded = name.lower()
    for lib in model.libraries:
        if lib.name.lower() == folded:
            return lib
    return None


DEFAULT_STRATEGIES: tuple[LookupStrategy, ...] = (
    exact_match,
    case_insensitive_match,
    name_only_match,
)


class LibraryResolver:
    """按固定顺序尝试各查找策略，第一个命中即返回"""

    def __init__(self, strategies: tuple[LookupStrategy, ...] = DEFAULT_STRATEGIES) -> None:
        self.strategies = strategies

    def resolve(
        self, model: LockFileModel, name: str, version_range: VersionRange,
    ) -> Library:
        """查找依赖包，全部策略未命中时抛出 LibraryNotFoundError"""
        for strategy in self.strategies:
            lib = strategy(model, name, version_range)
            if lib is not None:
                if strategy is not exact_match:
                    logger.debug(
                        "回退查找命中 (%s): %s %s -> %s",
                        strategy.__name__, name, version_range, lib,
                    )
                return lib
        raise LibraryNotFoundError(name, version_range)


_default_resolver = LibraryResolver()


def resolve(model: LockFileModel, name: str, version_range: VersionRange) -> Library:
    return _default_resolver.resolve(model, name, version_range)
