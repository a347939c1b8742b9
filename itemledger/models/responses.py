"""Response envelope returned by the dispatcher."""

from __future__ import annotations

from dataclasses import dataclass

OK = 200
ERROR = 500


@dataclass(frozen=True)
class Response:
    """Outcome of one invocation: a success payload or a failure message.

    ``status`` follows the ledger shim convention (200 success, 500 error);
    ``error_code`` carries the error kind so transports can map it further.
    """

    status: int
    message: str = ""
    payload: bytes | None = None
    error_code: str | None = None

    @classmethod
    def success(cls, payload: bytes | None) -> Response:
        return cls(status=OK, payload=payload)

    @classmethod
    def error(cls, message: str, code: str | None = None) -> Response:
        return cls(status=ERROR, message=message, error_code=code)

    @property
    def ok(self) -> bool:
        return self.status < 400
