# -*- coding: utf-8 -*-
"""
__init__.py
--------------------------------------------------------------------
汇总导入所有模型，使得：
- Flask-Migrate/Alembic 自动检测模型。
- 外部模块可简化引用：from models import TestCase, TestCaseRecord
"""

from .test_case import TestCase
from .records import Screenshot, TestCaseRecord

__all__ = ["TestCase", "Screenshot", "TestCaseRecord"]
