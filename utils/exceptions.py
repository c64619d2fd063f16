# utils/exceptions.py
from typing import Any, Optional
from werkzeug.exceptions import HTTPException


class BizError(HTTPException):
    code: int  # HTTP 状态码
    message: str  # 业务提示
    data: Optional[Any]  # 附加数据

    def __init__(self, message: str = "业务异常", code: int = 400, data: Any = None):
        self.code = code
        self.message = message
        self.data = data
        super().__init__(description=message)


class StoreError(BizError):
    """远端数据表调用失败（查询 / 写入 / 更新 / 删除）"""

    def __init__(self, message: str = "远端数据存储调用失败", code: int = 502, data: Any = None):
        super().__init__(message=message, code=code, data=data)


class StorageError(BizError):
    """对象存储调用失败（上传 / 删除）"""

    def __init__(self, message: str = "对象存储调用失败", code: int = 502, data: Any = None):
        super().__init__(message=message, code=code, data=data)
