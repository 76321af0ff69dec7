"""
Scripted HTTP transport for provider tests

Each send() pops the next scripted outcome: a RawResponse is returned and an
exception instance is raised. When the script runs out the default response
is returned. Every request is recorded for later assertions.
"""

import json
from typing import Any, Dict, List, Mapping, Optional

from unified_payments.models import HttpMethod, RawResponse
from unified_payments.services.http_transport import HttpTransport


def json_response(payload: Any, status: int = 200) -> RawResponse:
    return RawResponse(status=status, body=json.dumps(payload), headers={"Content-Type": "application/json"})


class RecordingTransport(HttpTransport):
    """HttpTransport that replays scripted outcomes instead of touching the network"""

    def __init__(self, outcomes: Optional[List[Any]] = None, default: Optional[RawResponse] = None):
        self.outcomes = list(outcomes or [])
        self.default = default or json_response({"success": True})
        self.calls: List[Dict[str, Any]] = []
        self.closed = False

    def script(self, *outcomes: Any) -> "RecordingTransport":
        self.outcomes.extend(outcomes)
        return self

    async def send(
        self,
        method: HttpMethod,
        url: str,
        headers: Mapping[str, str],
        params: Optional[Mapping[str, Any]] = None,
        timeout: float = 30,
    ) -> RawResponse:
        self.calls.append({
            "method": method,
            "url": url,
            "headers": dict(headers),
            "params": dict(params or {}),
            "timeout": timeout,
        })

        outcome = self.outcomes.pop(0) if self.outcomes else self.default
        if isinstance(outcome, BaseException):
            raise outcome
        return outcome

    async def close(self) -> None:
        self.closed = True

    @property
    def last_call(self) -> Dict[str, Any]:
        return self.calls[-1]
