"""Root of the Smoogle error hierarchy.

A ``SmoogleError`` records where it was raised, which lower-level exception
triggered it and any lookup details (collection name, model, top-k) the
raiser attached. ``to_dict`` turns all of that into the JSON body used by
the API error handlers and the structured logs.
"""

import inspect
import os
import traceback
from dataclasses import dataclass, field
from datetime import UTC, datetime
from types import FrameType
from typing import Any


def _utc_now() -> str:
    return datetime.now(UTC).isoformat()


@dataclass(frozen=True)
class RaiseSite:
    """Code location that constructed an error."""

    class_name: str
    method_name: str
    file_name: str
    line_number: int
    timestamp: str = field(default_factory=_utc_now)

    @classmethod
    def from_frame(cls, frame: FrameType | None) -> "RaiseSite":
        if frame is None:
            return cls("<unknown>", "<unknown>", "<unknown>", 0)
        owner = frame.f_locals.get("self")
        return cls(
            class_name=type(owner).__name__ if owner is not None else "<module>",
            method_name=frame.f_code.co_name,
            file_name=os.path.basename(frame.f_code.co_filename),
            line_number=frame.f_lineno,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "class": self.class_name,
            "method": self.method_name,
            "file": self.file_name,
            "line": self.line_number,
            "timestamp": self.timestamp,
        }


def _caller_outside_constructors(frame: FrameType | None) -> FrameType | None:
    """Walk up past every ``__init__`` frame of the error being built."""
    while frame is not None and frame.f_code.co_name == "__init__" and frame.f_back:
        frame = frame.f_back
    return frame


class SmoogleError(Exception):
    """Base class for every error Smoogle raises on purpose.

    Adapters wrap third-party failures so callers only ever match on this
    hierarchy::

        except Exception as e:
            raise IndexQueryError("Similarity query failed", cause=e) from e
    """

    error_code: str = "SMG_ERR_001"

    def __init__(
        self,
        message: str,
        *,
        cause: Exception | None = None,
        context: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.cause = cause
        self.extra_context = dict(context or {})
        self.location = RaiseSite.from_frame(
            _caller_outside_constructors(inspect.currentframe())
        )
        # Only meaningful while the wrapped exception is being handled
        self.stack_trace = traceback.format_exc() if cause is not None else None

    def to_dict(self, include_trace: bool = False) -> dict[str, Any]:
        """Structured form of the error: code, message, location, context and cause."""
        payload: dict[str, Any] = {
            "error": {
                "type": type(self).__name__,
                "code": self.error_code,
                "message": self.message,
            },
            "location": self.location.to_dict(),
        }
        if self.extra_context:
            payload["context"] = self.extra_context
        if include_trace and self.stack_trace:
            payload["stack_trace"] = [
                line for line in self.stack_trace.splitlines() if line.strip()
            ]
        if self.cause is not None:
            payload["cause"] = {"type": type(self.cause).__name__, "message": str(self.cause)}
        return payload
