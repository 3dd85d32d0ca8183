"""
Pageflow Models

Plain records passed between the API helpers and the driver.
"""
import json
from dataclasses import dataclass, field
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class ApiResponse:
    """Result of a network call."""

    status: int
    body: Any = None
    headers: Dict[str, str] = field(default_factory=dict)
    url: str = ""

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 300

    def to_dict(self) -> Dict[str, Any]:
        return {
            "status": self.status,
            "body": self.body,
            "headers": dict(self.headers),
            "url": self.url,
        }


@dataclass(frozen=True)
class Endpoint:
    """One interceptable network route."""

    method: str
    url: str
    alias: str
    response: Optional[Dict[str, Any]] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Endpoint":
        return cls(
            method=data["method"],
            url=data["url"],
            alias=data["alias"],
            response=data.get("response"),
        )


@dataclass
class Interception:
    """A call observed by an intercept rule."""

    alias: str
    method: str
    url: str
    request_body: Any = None
    response: Optional[ApiResponse] = None


def parse_body(raw: Optional[bytes], content_type: str = "") -> Any:
    """Decode a response/request payload, preferring JSON."""
    if not raw:
        return None
    text = raw.decode("utf-8", errors="replace") if isinstance(raw, bytes) else raw
    if "json" in content_type or text[:1] in ("{", "["):
        try:
            return json.loads(text)
        except ValueError:
            pass
    return text


def fulfill_args(canned: Dict[str, Any]) -> Dict[str, Any]:
    """
    Convert a canned ``{statusCode, body, headers}`` response into
    keyword arguments for ``Route.fulfill``.
    """
    status = int(canned.get("statusCode", 200))
    headers = dict(canned.get("headers") or {})
    body = canned.get("body")

    if body is None:
        payload = ""
    elif isinstance(body, (dict, list, bool, int, float)):
        payload = json.dumps(body)
        headers.setdefault("content-type", "application/json")
    else:
        payload = str(body)

    return {"status": status, "headers": headers, "body": payload}
