"""lockgraph 命令行接口

CLI 按领域拆分为子模块，每个模块注册自己的命令到 main group。
业务异常 (LockGraphError) 统一在 group 层转为 "error <CODE>: <message>" 输出到 stderr，
退出码为 1；锁文件是一次性静态输入，失败不重试。
"""

from __future__ import annotations

import logging
import os
from typing import Any

import click

from lockgraph import __version__
from lockgraph.core.config import DEFAULT_CONFIG_FILE, get_config, init_config
from lockgraph.core.exceptions import LockGraphError
from lockgraph.utils.logger import setup_logging

logger = logging.getLogger(__name__)


class LockGraphGroup(click.Group):
    """捕获业务异常并按错误码输出"""

    def invoke(self, ctx: click.Context) -> Any:
        try:
            return super().invoke(ctx)
        except LockGraphError as e:
            logger.debug("命令失败", exc_info=True, extra={"code": e.code})
            click.echo(f"error {e.code}: {e}", err=True)
            ctx.exit(1)


def _load_model(lock_file: str | None) -> Any:
    """读取锁文件，未指定路径时使用配置中的 lock_file"""
    from lockgraph.core.lock import load_lock_file
    return load_lock_file(lock_file or get_config().lock_file)


@click.group(cls=LockGraphGroup)
@click.version_option(version=__version__)
@click.option(
    "--config", "config_path", default=DEFAULT_CONFIG_FILE,
    help="配置文件路径（不存在时使用默认配置）",
)
def main(config_path: str) -> None:
    """lockgraph - 基于锁文件的依赖图解析"""
    setup_logging(
        level=os.getenv("LOCKGRAPH_LOG_LEVEL", "WARNING"),
        json_output=os.getenv("LOCKGRAPH_LOG_JSON", "") == "1",
    )
    init_config(config_path)


# 注册各领域子命令
from lockgraph.cli.cmd_lock import register as _reg_lock  # noqa: E402
from lockgraph.cli.cmd_misc import register as _reg_misc  # noqa: E402

_reg_lock(main)
_reg_misc(main)
