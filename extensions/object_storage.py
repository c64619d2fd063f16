"""Screenshot object storage: S3-compatible bucket or a local directory."""
from __future__ import annotations

import logging
import os
from typing import Iterable, Optional
from urllib.parse import quote

import boto3
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError

from utils.exceptions import StorageError

logger = logging.getLogger(__name__)

DELETE_BATCH_SIZE = 1000


def _guess_content_type(key: str) -> str:
    lowered = key.lower()
    if lowered.endswith(".png"):
        return "image/png"
    if lowered.endswith(".jpg") or lowered.endswith(".jpeg"):
        return "image/jpeg"
    if lowered.endswith(".gif"):
        return "image/gif"
    if lowered.endswith(".webp"):
        return "image/webp"
    return "application/octet-stream"


class ObjectStorage:
    """对象存储接口：上传、获取公开地址、批量删除。"""

    def upload(self, bucket: str, key: str, data: bytes, content_type: Optional[str] = None) -> None:
        raise NotImplementedError

    def get_public_url(self, bucket: str, key: str) -> str:
        raise NotImplementedError

    def remove(self, bucket: str, keys: Iterable[str]) -> None:
        raise NotImplementedError


class LocalObjectStorage(ObjectStorage):
    """本地目录存储，文件位于 ``<base_dir>/<bucket>/<key>``。

    公开地址由 ``/api/storage`` 路由提供访问。
    """

    def __init__(self, base_dir: str, public_base_url: str = "") -> None:
        self.base_dir = os.path.abspath(base_dir)
        self.public_base_url = (public_base_url or "").rstrip("/")

    def _target_path(self, bucket: str, key: str) -> str:
        root = os.path.join(self.base_dir, bucket)
        target = os.path.abspath(os.path.join(root, os.path.normpath(key).lstrip(os.sep)))
        # 防止路径穿越写到存储目录之外
        if not target.startswith(os.path.abspath(root) + os.sep):
            raise StorageError(f"非法的存储路径: {key}", 400)
        return target

    def upload(self, bucket, key, data, content_type=None):
        target = self._target_path(bucket, key)
        try:
            os.makedirs(os.path.dirname(target), exist_ok=True)
            with open(target, "wb") as fh:
                fh.write(data)
        except OSError as exc:
            logger.error("本地存储写入失败 %s/%s: %s", bucket, key, exc)
            raise StorageError(f"上传失败: {exc.strerror or exc}") from exc

    def get_public_url(self, bucket, key):
        return f"{self.public_base_url}/api/storage/{quote(bucket)}/{quote(key)}"

    def remove(self, bucket, keys):
        for key in keys:
            target = self._target_path(bucket, key)
            try:
                os.remove(target)
            except FileNotFoundError:
                # 与 S3 delete_objects 一致：不存在的 key 视为已删除
                continue
            except OSError as exc:
                logger.error("本地存储删除失败 %s/%s: %s", bucket, key, exc)
                raise StorageError(f"删除失败: {exc.strerror or exc}") from exc


class S3ObjectStorage(ObjectStorage):
    """S3 兼容对象存储（path-style 访问）。"""

    def __init__(self, client, endpoint_url: Optional[str] = None, public_url: Optional[str] = None) -> None:
        self.client = client
        self.endpoint_url = (endpoint_url or "").rstrip("/")
        self.public_url = (public_url or "").rstrip("/")

    @classmethod
    def from_config(cls, cfg) -> "S3ObjectStorage":
        session = boto3.session.Session(
            aws_access_key_id=cfg.get("AWS_ACCESS_KEY"),
            aws_secret_access_key=cfg.get("AWS_SECRET_KEY"),
            region_name=cfg.get("AWS_REGION_NAME"),
        )
        s3_cfg = Config(
            signature_version=cfg.get("AWS_SIGNATURE_VERSION") or "s3v4",
            s3={"addressing_style": "path"},  # 自定义 endpoint 常用 path-style
        )
        client = session.client("s3", endpoint_url=cfg.get("AWS_ENDPOINT_URL"), config=s3_cfg)
        return cls(client, cfg.get("AWS_ENDPOINT_URL"), cfg.get("S3_PUBLIC_URL"))

    def upload(self, bucket, key, data, content_type=None):
        try:
            self.client.put_object(
                Bucket=bucket,
                Key=key,
                Body=data,
                ContentType=content_type or _guess_content_type(key),
            )
        except (ClientError, BotoCoreError) as exc:
            logger.error("S3 上传失败 %s/%s: %s", bucket, key, exc)
            raise StorageError(f"上传失败: {exc}") from exc

    def get_public_url(self, bucket, key):
        if self.public_url:
            return f"{self.public_url}/{quote(key)}"
        # 未配置 endpoint 时使用 boto3 按 region 解析出的地址
        endpoint = self.endpoint_url or self.client.meta.endpoint_url.rstrip("/")
        return f"{endpoint}/{quote(bucket)}/{quote(key)}"

    def remove(self, bucket, keys):
        keys = list(keys)
        # delete_objects 单次最多 1000 个 key
        for start in range(0, len(keys), DELETE_BATCH_SIZE):
            self._delete_batch(bucket, keys[start:start + DELETE_BATCH_SIZE])

    def _delete_batch(self, bucket, keys):
        try:
            resp = self.client.delete_objects(
                Bucket=bucket,
                Delete={"Objects": [{"Key": key} for key in keys], "Quiet": True},
            )
        except (ClientError, BotoCoreError) as exc:
            logger.error("S3 删除失败 %s %s: %s", bucket, keys, exc)
            raise StorageError(f"删除失败: {exc}") from exc
        errors = resp.get("Errors") or []
        if errors:
            first = errors[0]
            raise StorageError(f"删除失败: {first.get('Key')} {first.get('Message')}")


def init_object_storage(app) -> ObjectStorage:
    cfg = app.config
    backend = (cfg.get("STORAGE_BACKEND") or "local").lower()
    if backend == "s3":
        storage = S3ObjectStorage.from_config(cfg)
    elif backend == "local":
        storage = LocalObjectStorage(cfg["ATTACHMENT_STORAGE_DIR"], cfg.get("PUBLIC_BASE_URL", ""))
    else:
        raise RuntimeError(f"Unknown STORAGE_BACKEND: {backend}")
    app.extensions["object_storage"] = storage
    app.logger.info("Object storage initialized: %s", backend)
    return storage


__all__ = [
    "ObjectStorage",
    "LocalObjectStorage",
    "S3ObjectStorage",
    "init_object_storage",
]
