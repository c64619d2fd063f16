# -*- coding: utf-8 -*-
"""Datetime helpers.

系统内所有时间统一使用 UTC：
- ``updated_at`` 由用例存储层在每次变更时刷新；
- 截图的 ``uploaded_at`` 与存储 key 中的毫秒时间戳同源。
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional


def _ensure_utc(dt: datetime) -> datetime:
    """将给定 ``datetime`` 统一转换为带 UTC 时区的对象。"""

    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def datetime_to_iso(dt: Optional[datetime]) -> Optional[str]:
    """将 ``datetime`` 格式化为 UTC ISO 字符串。

    :param dt: 需要转换的时间; ``None`` 时直接返回 ``None``。
    :return: 带 ``+00:00`` 时区偏移的 ISO 8601 格式字符串。
    """

    if dt is None:
        return None
    return _ensure_utc(dt).isoformat()


def to_millis(dt: datetime) -> int:
    """毫秒级 Unix 时间戳，用于生成截图存储 key。"""

    return int(_ensure_utc(dt).timestamp() * 1000)
