"""
HTTP request/response model.

Requests are encoded to JSON and handed to the host, which performs the call
and answers with a JSON response. Nothing here touches the network.

Request:  {"method":"GET","url":"...","body":"...","headers":{...}}
Response: {"status":200,"error":null,"headers":{...},"body":[104,105]}
"""

import json
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional

from chainprobe.errors import HostCallError


class HttpMethod(Enum):
    POST = "POST"
    GET = "GET"
    PUT = "PUT"
    PATCH = "PATCH"
    DELETE = "DELETE"


@dataclass
class HttpRequest:
    method: HttpMethod
    url: str
    headers: Dict[str, str] = field(default_factory=dict)
    body: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "method": self.method.value,
            "url": self.url,
        }
        if self.body is not None:
            payload["body"] = self.body
        payload["headers"] = dict(self.headers)
        return payload

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), separators=(",", ":"), ensure_ascii=False)


class HttpResponse:
    """Read-only view over the host's JSON response."""

    def __init__(self, payload: Dict[str, Any]):
        self.payload = payload

    @classmethod
    def from_json(cls, text: str) -> "HttpResponse":
        try:
            payload = json.loads(text)
        except ValueError as e:
            raise HostCallError(f"malformed http response: {e}") from e

        if not isinstance(payload, dict) or not isinstance(payload.get("status"), int):
            raise HostCallError(f"http response has no integer status: {text[:200]}")

        return cls(payload)

    def status(self) -> int:
        return self.payload["status"]

    def error(self) -> Optional[str]:
        return self.payload.get("error")

    def headers(self) -> Dict[str, str]:
        return dict(self.payload.get("headers") or {})

    def body(self) -> Optional[bytes]:
        body = self.payload.get("body")
        if body is None:
            return None
        return bytes(body)

    def text(self) -> Optional[str]:
        body = self.body()
        if body is None:
            return None
        return body.decode("utf-8", errors="replace")

    def __repr__(self) -> str:
        return f"HttpResponse(status={self.status()}, error={self.error()!r})"
