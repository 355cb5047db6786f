"""CLI — 锁文件查询命令"""

from __future__ import annotations

import click

from lockgraph.cli import _load_model
from lockgraph.core.config import get_config
from lockgraph.core.lock import VersionRange, closure, resolve, unique_libraries

_LOCK_FILE_HELP = "锁文件路径（默认取配置中的 lock_file）"


def register(group: click.Group) -> None:
    group.add_command(list_libraries)
    group.add_command(list_targets)
    group.add_command(resolve_library)
    group.add_command(show_closure)


@click.command(name="libraries")
@click.option("--lock-file", default=None, help=_LOCK_FILE_HELP)
def list_libraries(lock_file: str | None) -> None:
    """列出锁文件中所有已解析的包"""
    model = _load_model(lock_file)
    if not model.libraries:
        click.echo("锁文件中没有任何包。")
        return
    for lib in model.libraries:
        click.echo(f"  {lib.name:40s} {str(lib.version):16s} {lib.path}")


@click.command(name="targets")
@click.option("--lock-file", default=None, help=_LOCK_FILE_HELP)
def list_targets(lock_file: str | None) -> None:
    """列出锁文件中的目标框架"""
    model = _load_model(lock_file)
    if not model.targets:
        click.echo("锁文件中没有任何目标框架。")
        return
    for target in model.targets:
        click.echo(f"  {target.name:30s} {len(target.libraries)} 个包")


@click.command(name="resolve")
@click.argument("name")
@click.argument("version_range", required=False, default=None)
@click.option("--lock-file", default=None, help=_LOCK_FILE_HELP)
def resolve_library(name: str, version_range: str | None, lock_file: str | None) -> None:
    """按名称和版本范围查找已解析的包（不指定范围时忽略版本）"""
    model = _load_model(lock_file)
    vr = VersionRange.parse(version_range) if version_range else VersionRange.any()
    lib = resolve(model, name, vr)
    click.echo(str(lib))


@click.command(name="closure")
@click.argument("name")
@click.option("--target", default=None, help="目标框架（默认取配置或锁文件中的第一个）")
@click.option("--unique", is_flag=True, help="按 (名称, 版本) 去重")
@click.option("--all", "keep_all", is_flag=True, help="保留重复项（覆盖配置中的 unique）")
@click.option("--paths", is_flag=True, help="输出包安装路径而非 名称/版本")
@click.option("--lock-file", default=None, help=_LOCK_FILE_HELP)
def show_closure(
    name: str, target: str | None, unique: bool, keep_all: bool,
    paths: bool, lock_file: str | None,
) -> None:
    """展开包的全部传递依赖（深度优先，先序）"""
    cfg = get_config()
    model = _load_model(lock_file)
    if not unique and not keep_all:
        unique = cfg.unique
    libraries = closure(model, name, target=target or cfg.default_target)
    if unique:
        libraries = unique_libraries(libraries)
    for lib in libraries:
        click.echo(lib.path if paths and lib.path else str(lib))
