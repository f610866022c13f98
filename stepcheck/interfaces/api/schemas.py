from pydantic import BaseModel
from typing import Literal

from stepcheck.diagnostics.markers import Diagnostics


# 校验请求 / 响应模式
class ValidationRequest(BaseModel):
    text: str
    format: Literal["json", "yaml"] = "json"


class ValidationResponse(BaseModel):
    status: str = "ok"
    data: Diagnostics
    message: str
