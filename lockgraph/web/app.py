"""锁文件查询 Web 服务（基于 Flask）

提供：包列表、目标框架列表、依赖包查找、传递依赖展开。

启动方式: lockgraph dashboard --port 8888
"""

from __future__ import annotations

import logging

from flask import Flask, jsonify
from werkzeug.exceptions import HTTPException

from lockgraph.core.exceptions import LockGraphError
from lockgraph.web.blueprints.lock_bp import lock_bp
from lockgraph.web.responses import from_error

logger = logging.getLogger(__name__)

app = Flask(__name__)
app.register_blueprint(lock_bp)


# =========================================================================
# 全局 JSON 错误处理
# =========================================================================


@app.errorhandler(LockGraphError)
def handle_lockgraph_error(exc: LockGraphError):
    """业务异常按错误码映射 HTTP 状态码"""
    logger.warning("请求失败 [%s]: %s", exc.code, exc)
    return from_error(exc)


@app.errorhandler(HTTPException)
def handle_http_exception(exc):
    """将所有 HTTP 异常统一返回 JSON"""
    return jsonify(error=exc.description), exc.code


@app.errorhandler(Exception)
def handle_generic_exception(exc):  # noqa: ARG001
    """捕获未处理异常，返回 500 JSON"""
    logger.exception("未处理的异常")
    return jsonify(error="服务器内部错误"), 500


@app.route("/api/health")
def health():
    from lockgraph import __version__
    return jsonify(status="ok", version=__version__)


def run_server(port: int = 8888, debug: bool = False, host: str = "127.0.0.1") -> None:
    logger.info("lockgraph 服务已启动: http://%s:%d", host, port)
    app.run(host=host, port=port, debug=debug)
