"""HTTP POST action executor."""

import socket
from typing import Optional
from urllib.error import HTTPError, URLError
from urllib.parse import urlparse
from urllib.request import Request, urlopen

from ..ledger.models import ActionTarget
from .base import BaseActionExecutor, ExecutionResult, ExecutionStatus


class HttpActionExecutor(BaseActionExecutor):
    """POSTs the proposal payload to the target address.

    Any 2xx response is success. Network errors, timeouts and non-2xx
    responses are failures.
    """

    def __init__(self, name: str = "http", timeout_seconds: float = 30,
                 headers: Optional[dict[str, str]] = None):
        super().__init__(name)
        self.timeout_seconds = timeout_seconds
        self.headers = headers or {}

    def _perform(self, target: ActionTarget) -> ExecutionResult:
        parsed = urlparse(target.address)
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            return ExecutionResult(
                status=ExecutionStatus.FAILED,
                target=target.address,
                message=f"Invalid URL: {target.address}"
            )

        headers = {"Content-Type": "application/octet-stream", **self.headers}
        request = Request(target.address, data=target.payload, headers=headers, method="POST")

        try:
            with urlopen(request, timeout=self.timeout_seconds) as response:
                status_code = response.status
        except HTTPError as e:
            return ExecutionResult(
                status=ExecutionStatus.FAILED,
                target=target.address,
                message=f"HTTP {e.code}: {e.reason}",
                error=e
            )
        except (URLError, socket.timeout, OSError) as e:
            return ExecutionResult(
                status=ExecutionStatus.FAILED,
                target=target.address,
                message=f"Network error: {e}",
                error=e
            )

        if 200 <= status_code < 300:
            return ExecutionResult(
                status=ExecutionStatus.SUCCESS,
                target=target.address,
                message=f"HTTP {status_code}"
            )

        return ExecutionResult(
            status=ExecutionStatus.FAILED,
            target=target.address,
            message=f"HTTP {status_code}"
        )

    def health_check(self) -> bool:
        return True
