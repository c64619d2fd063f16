# -*- coding: utf-8 -*-
"""
records.py
--------------------------------------------------------------------
客户端缓存使用的记录结构：
- Screenshot：截图子记录，只属于一个用例
- TestCaseRecord：一条用例，与远端 test_cases 行一一对应
from_row 负责兼容旧数据（缺失字段补默认值），to_row 输出远端行结构。
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any, Dict, List, Mapping, Optional

from constants.test_case import CreatedBy, LegacyStatus, PlatformStatus


@dataclass(frozen=True)
class Screenshot:
    id: str
    path: str
    url: str
    filename: str
    platform: Optional[str] = None
    uploaded_at: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Screenshot":
        return cls(
            id=str(data.get("id")),
            path=data.get("path") or "",
            url=data.get("url") or "",
            filename=data.get("filename") or "",
            platform=data.get("platform") or None,
            uploaded_at=data.get("uploaded_at"),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "path": self.path,
            "url": self.url,
            "filename": self.filename,
            "platform": self.platform,
            "uploaded_at": self.uploaded_at,
        }


def _screenshots_from(value) -> List[Screenshot]:
    if not value:
        return []
    return [item if isinstance(item, Screenshot) else Screenshot.from_dict(item) for item in value]


@dataclass(frozen=True)
class TestCaseRecord:
    __test__ = False  # 避免被 pytest 当作测试类收集

    id: str
    category: str
    title: str
    status: str = LegacyStatus.UNTESTED.value
    ios_status: str = PlatformStatus.UNTESTED.value
    android_status: str = PlatformStatus.UNTESTED.value
    notes: str = ""
    screenshots: List[Screenshot] = field(default_factory=list)
    created_by: str = CreatedBy.SEED.value
    updated_at: Optional[str] = None

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "TestCaseRecord":
        """远端行 -> 缓存记录，缺失字段按旧数据兼容规则补齐"""
        return cls(
            id=str(row["id"]),
            category=row.get("category") or "",
            title=row.get("title") or "",
            status=row.get("status") or LegacyStatus.UNTESTED.value,
            ios_status=row.get("ios_status") or PlatformStatus.UNTESTED.value,
            android_status=row.get("android_status") or PlatformStatus.UNTESTED.value,
            notes=row.get("notes") or "",
            screenshots=_screenshots_from(row.get("screenshots")),
            created_by=row.get("created_by") or CreatedBy.SEED.value,
            updated_at=row.get("updated_at"),
        )

    def to_row(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "category": self.category,
            "title": self.title,
            "status": self.status,
            "ios_status": self.ios_status,
            "android_status": self.android_status,
            "notes": self.notes,
            "screenshots": [s.to_dict() for s in self.screenshots],
            "created_by": self.created_by,
            "updated_at": self.updated_at,
        }

    def merged(self, partial: Mapping[str, Any]) -> "TestCaseRecord":
        """应用部分字段，返回新记录（原记录不变）"""
        changes = dict(partial)
        if "screenshots" in changes:
            changes["screenshots"] = _screenshots_from(changes["screenshots"])
        return replace(self, **changes)

    @property
    def is_deletable(self) -> bool:
        return self.created_by == CreatedBy.USER.value

    def find_screenshot(self, screenshot_id: str) -> Optional[Screenshot]:
        for shot in self.screenshots:
            if shot.id == screenshot_id:
                return shot
        return None
