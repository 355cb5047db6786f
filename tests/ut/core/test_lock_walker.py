"""TransitiveDependencyWalker 单元测试 — 先序遍历 / 菱形 / 环 / 缺失"""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor

import pytest

from lockgraph.core.exceptions import (
    CyclicDependencyError,
    TargetLibraryNotFoundError,
    TargetNotFoundError,
)
from lockgraph.core.lock.models import (
    DependencySpec,
    Library,
    LockFileModel,
    TargetContext,
    TargetLibrary,
)
from lockgraph.core.lock.versioning import SemanticVersion, VersionRange
from lockgraph.core.lock.walker import (
    TransitiveDependencyWalker,
    closure,
    unique_libraries,
    walk,
)

V1 = SemanticVersion.parse("1.0.0")


def _graph(graph: dict[str, list[str]], target: str = "net45") -> tuple[LockFileModel, TargetContext]:
    """{'A': ['B', 'C'], ...} -> (model, context)，所有包版本均为 1.0.0"""
    libs = tuple(Library(name=n, version=V1, path=f"{n.lower()}/1.0.0") for n in graph)
    targets = tuple(
        TargetLibrary(
            name=n, version=V1,
            dependencies=tuple(
                DependencySpec(d, VersionRange.parse("1.0.0")) for d in deps
            ),
        )
        for n, deps in graph.items()
    )
    ctx = TargetContext(name=target, libraries=targets)
    return LockFileModel(libraries=libs, targets=(ctx,)), ctx


def _names(model: LockFileModel, ctx: TargetContext, root: str) -> list[str]:
    return [lib.name for lib in walk(ctx.require_library(root), model, ctx)]


class TestWalkOrder:
    def test_no_dependencies(self) -> None:
        model, ctx = _graph({"A": []})
        assert _names(model, ctx, "A") == []

    def test_linear_chain(self) -> None:
        model, ctx = _graph({"A": ["B"], "B": ["C"], "C": []})
        assert _names(model, ctx, "A") == ["B", "C"]

    def test_diamond_is_not_deduplicated(self) -> None:
        model, ctx = _graph({"A": ["B", "C"], "B": ["D"], "C": ["D"], "D": []})
        assert _names(model, ctx, "A") == ["B", "D", "C", "D"]

    def test_preorder_depth_first(self) -> None:
        model, ctx = _graph({
            "A": ["B", "E"], "B": ["C", "D"], "C": [], "D": [], "E": ["F"], "F": [],
        })
        assert _names(model, ctx, "A") == ["B", "C", "D", "E", "F"]

    def test_yields_global_library_records(self) -> None:
        model, ctx = _graph({"A": ["B"], "B": []})
        (lib,) = walk(ctx.require_library("A"), model, ctx)
        assert lib is model.get_library("B", V1)
        assert lib.path == "b/1.0.0"

    def test_deep_chain_without_recursion_limit(self) -> None:
        size = 5000
        graph = {f"P{i}": [f"P{i + 1}"] for i in range(size - 1)}
        graph[f"P{size - 1}"] = []
        model, ctx = _graph(graph)
        names = _names(model, ctx, "P0")
        assert len(names) == size - 1
        assert names[-1] == f"P{size - 1}"


class TestWalkLaziness:
    def test_lazy_and_restartable(self) -> None:
        model, ctx = _graph({"A": ["B"], "B": ["C"], "C": []})
        root = ctx.require_library("A")
        gen = walk(root, model, ctx)
        assert next(gen).name == "B"
        # 第二次调用重新从头遍历，与第一个生成器互不影响
        assert [lib.name for lib in walk(root, model, ctx)] == ["B", "C"]
        assert next(gen).name == "C"

    def test_errors_surface_only_when_reached(self) -> None:
        model, ctx = _graph({"A": ["B", "X"], "B": []})
        gen = walk(ctx.require_library("A"), model, ctx)
        assert next(gen).name == "B"
        with pytest.raises(TargetLibraryNotFoundError):
            next(gen)

    def test_concurrent_walks_share_model(self) -> None:
        model, ctx = _graph({"A": ["B", "C"], "B": ["D"], "C": ["D"], "D": []})
        with ThreadPoolExecutor(max_workers=4) as pool:
            results = list(pool.map(lambda _: _names(model, ctx, "A"), range(16)))
        assert all(r == ["B", "D", "C", "D"] for r in results)


class TestWalkErrors:
    def test_cycle_raises(self) -> None:
        model, ctx = _graph({"A": ["B"], "B": ["A"]})
        with pytest.raises(CyclicDependencyError) as exc_info:
            _names(model, ctx, "A")
        assert exc_info.value.path == [("A", V1), ("B", V1), ("A", V1)]
        assert "A/1.0.0 -> B/1.0.0 -> A/1.0.0" in str(exc_info.value)

    def test_self_cycle_raises(self) -> None:
        model, ctx = _graph({"A": ["A"]})
        with pytest.raises(CyclicDependencyError):
            _names(model, ctx, "A")

    def test_cycle_below_root(self) -> None:
        model, ctx = _graph({"A": ["B"], "B": ["C"], "C": ["B"]})
        gen = walk(ctx.require_library("A"), model, ctx)
        assert [next(gen).name, next(gen).name] == ["B", "C"]
        with pytest.raises(CyclicDependencyError) as exc_info:
            next(gen)
        assert [n for n, _ in exc_info.value.path] == ["A", "B", "C", "B"]

    def test_missing_target_library(self) -> None:
        model, ctx = _graph({"A": ["X"]})
        with pytest.raises(TargetLibraryNotFoundError) as exc_info:
            _names(model, ctx, "A")
        assert exc_info.value.name == "X"
        assert exc_info.value.target == "net45"

    def test_target_lookup_is_case_sensitive(self) -> None:
        model, ctx = _graph({"A": ["b"], "B": []})
        with pytest.raises(TargetLibraryNotFoundError):
            _names(model, ctx, "A")

    def test_approximate_version_resolved_by_fallback(self) -> None:
        """依赖声明 NEST 1.9.0，目标框架与全局都只有 1.9.1"""
        v191 = SemanticVersion.parse("1.9.1")
        nest = Library(name="NEST", version=v191)
        ctx = TargetContext(name="net45", libraries=(
            TargetLibrary(name="App", version=V1, dependencies=(
                DependencySpec("NEST", VersionRange.parse("1.9.0")),
            )),
            TargetLibrary(name="NEST", version=v191),
        ))
        model = LockFileModel(libraries=(nest,), targets=(ctx,))
        assert list(walk(ctx.require_library("App"), model, ctx)) == [nest]


class TestClosure:
    def test_closure_default_target(self) -> None:
        model, _ = _graph({"A": ["B"], "B": []})
        assert [lib.name for lib in closure(model, "A")] == ["B"]

    def test_closure_named_target(self) -> None:
        model, _ = _graph({"A": ["B"], "B": []}, target="netstandard2.0")
        assert [lib.name for lib in closure(model, "A", target="netstandard2.0")] == ["B"]

    def test_closure_unknown_target(self) -> None:
        model, _ = _graph({"A": []})
        with pytest.raises(TargetNotFoundError, match="net99"):
            closure(model, "A", target="net99")

    def test_closure_unknown_root(self) -> None:
        model, _ = _graph({"A": []})
        with pytest.raises(TargetLibraryNotFoundError):
            closure(model, "Z")

    def test_custom_walker(self) -> None:
        model, _ = _graph({"A": ["B"], "B": []})
        walker = TransitiveDependencyWalker()
        assert [lib.name for lib in closure(model, "A", walker=walker)] == ["B"]

    def test_unique_libraries(self) -> None:
        model, ctx = _graph({"A": ["B", "C"], "B": ["D"], "C": ["D"], "D": []})
        libs = unique_libraries(walk(ctx.require_library("A"), model, ctx))
        assert [lib.name for lib in libs] == ["B", "D", "C"]
