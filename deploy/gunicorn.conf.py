"""Gunicorn 生产配置 — lockgraph 锁文件查询服务

用法:
  LOCKGRAPH_CONFIG=lockgraph.yml gunicorn --config deploy/gunicorn.conf.py lockgraph.web.app:app

每个请求都会重新读取配置中的 lock_file，锁文件更新后无需重启服务。
"""

import multiprocessing
import os

# ---------- 网络 ----------
bind = os.getenv("LOCKGRAPH_BIND", "127.0.0.1:8888")

# ---------- 并发 ----------
# 查询只读锁文件，worker 间不共享状态；解析是纯 CPU 计算，线程数不宜过多
workers = int(os.getenv("LOCKGRAPH_WORKERS", min(multiprocessing.cpu_count() + 1, 4)))
threads = int(os.getenv("LOCKGRAPH_THREADS", "2"))
worker_class = "gthread"
# 大型 project.assets.json 的解析 + 展开应在数秒内完成
timeout = 60

# ---------- 日志 ----------
accesslog = os.getenv("LOCKGRAPH_ACCESS_LOG", "-")
errorlog = os.getenv("LOCKGRAPH_ERROR_LOG", "-")
loglevel = os.getenv("LOCKGRAPH_LOG_LEVEL", "info")


def post_worker_init(worker):  # noqa: ARG001
    """worker 启动后加载 lockgraph 配置（锁文件路径、默认目标框架）"""
    from lockgraph.core.config import DEFAULT_CONFIG_FILE, init_config
    from lockgraph.utils.logger import setup_logging

    setup_logging(level=loglevel, json_output=os.getenv("LOCKGRAPH_LOG_JSON", "") == "1")
    init_config(os.getenv("LOCKGRAPH_CONFIG", DEFAULT_CONFIG_FILE))
