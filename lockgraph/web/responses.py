"""Web 层统一响应辅助函数"""

from __future__ import annotations

from flask import Response, jsonify

from lockgraph.core.exceptions import LockGraphError

# 业务错误码 -> HTTP 状态码，未列出的按 500 处理
_STATUS_BY_CODE = {
    "LIBRARY_NOT_FOUND": 404,
    "TARGET_NOT_FOUND": 404,
    "TARGET_LIBRARY_NOT_FOUND": 404,
    "VERSION_FORMAT": 400,
    "CYCLIC_DEPENDENCY": 422,
    "LOCKFILE_ERROR": 422,
}


def ok(data: dict, status: int = 200) -> tuple[Response, int] | Response:
    """成功响应"""
    if status == 200:
        return jsonify(data)
    return jsonify(data), status


def bad_request(message: str) -> tuple[Response, int]:
    """请求参数错误"""
    return jsonify(error=message), 400


def from_error(exc: LockGraphError) -> tuple[Response, int]:
    """业务异常 -> JSON 错误响应"""
    status = _STATUS_BY_CODE.get(exc.code, 500)
    return jsonify(error=str(exc), code=exc.code), status
