# -*- coding: utf-8 -*-
"""本地对象存储的公开访问接口（STORAGE_BACKEND=local 时使用）."""

from __future__ import annotations

import os

from flask import Blueprint, abort, current_app, send_file


attachment_bp = Blueprint("attachment", __name__, url_prefix="/api/storage")


@attachment_bp.get("/<bucket>/<path:key>")
def serve_object(bucket: str, key: str):
    """根据 bucket + key 返回截图内容."""

    if (current_app.config.get("STORAGE_BACKEND") or "local").lower() != "local":
        abort(404)
    storage_dir = current_app.config.get("ATTACHMENT_STORAGE_DIR")
    if not storage_dir:
        abort(404)

    storage_root = os.path.abspath(storage_dir)
    normalized_path = os.path.normpath(os.path.join(bucket, key)).lstrip(os.sep)
    target_path = os.path.abspath(os.path.join(storage_root, normalized_path))

    # 防止路径穿越访问其他目录
    if not target_path.startswith(storage_root + os.sep):
        abort(404)
    if not os.path.isfile(target_path):
        abort(404)

    return send_file(target_path, conditional=True)
