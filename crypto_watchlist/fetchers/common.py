from typing import Any

import httpx


class UnexpectedResponseError(ValueError):
    """接口返回了非 200 状态码或业务错误码。"""


def read_json(response: httpx.Response, source: str) -> Any:
    if response.status_code != 200:
        raise UnexpectedResponseError(
            f"{source} 返回异常状态码 {response.status_code}：{response.text[:200]}"
        )
    return response.json()
