"""锁文件查询 API Blueprint"""

from __future__ import annotations

from flask import Blueprint, Response, request

from lockgraph.core.lock import (
    Library,
    LockFileModel,
    VersionRange,
    closure,
    load_lock_file,
    resolve,
    unique_libraries,
)
from lockgraph.web.responses import bad_request, ok

lock_bp = Blueprint("lock", __name__, url_prefix="/api/lock")


def _model() -> LockFileModel:
    from lockgraph.core.config import get_config
    return load_lock_file(get_config().lock_file)


def _library_dict(lib: Library) -> dict:
    return {
        "name": lib.name,
        "version": str(lib.version),
        "type": lib.type,
        "path": lib.path,
        "sha512": lib.sha512,
    }


@lock_bp.route("/libraries", methods=["GET"])
def list_libraries() -> Response:
    model = _model()
    return ok({"libraries": [_library_dict(lib) for lib in model.libraries]})


@lock_bp.route("/targets", methods=["GET"])
def list_targets() -> Response:
    model = _model()
    return ok({"targets": [
        {"name": t.name, "libraries": len(t.libraries)} for t in model.targets
    ]})


@lock_bp.route("/resolve", methods=["GET"])
def resolve_library() -> tuple[Response, int] | Response:
    name = request.args.get("name", "").strip()
    if not name:
        return bad_request("需要提供 name")
    raw_range = request.args.get("range", "").strip()
    vr = VersionRange.parse(raw_range) if raw_range else VersionRange.any()
    lib = resolve(_model(), name, vr)
    return ok({"library": _library_dict(lib)})


@lock_bp.route("/targets/<path:target>/closure/<name>", methods=["GET"])
def show_closure(target: str, name: str) -> Response:
    libraries = list(closure(_model(), name, target=target))
    unique = request.args.get("unique", "") in ("1", "true", "yes")
    if unique:
        libraries = unique_libraries(libraries)
    return ok({
        "target": target,
        "name": name,
        "unique": unique,
        "libraries": [_library_dict(lib) for lib in libraries],
    })
