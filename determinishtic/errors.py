"""Structured error hierarchy for prompt building and tool sessions."""

from __future__ import annotations


class DeterminishticError(Exception):
    def __init__(self, code: str, message: str, cause: Exception | None = None) -> None:
        super().__init__(message)
        self.code = code
        self.cause = cause

    @classmethod
    def wrap(cls, err: Exception) -> DeterminishticError:
        if isinstance(err, DeterminishticError):
            return err
        return DeterminishticError("UNKNOWN", str(err), err)


class ConfigurationError(DeterminishticError):
    def __init__(self, message: str, cause: Exception | None = None) -> None:
        super().__init__("CONFIGURATION", message, cause)


class RenderError(DeterminishticError):
    def __init__(self, message: str, cause: Exception | None = None) -> None:
        super().__init__("RENDER", message, cause)


class DecodeError(DeterminishticError):
    def __init__(
        self, tool_name: str, message: str, cause: Exception | None = None, code: str = "DECODE"
    ) -> None:
        super().__init__(code, message, cause)
        self.tool_name = tool_name


class ResultError(DecodeError):
    """The engine's ``return_result`` payload could not be decoded. Terminal."""

    def __init__(self, tool_name: str, message: str, cause: Exception | None = None) -> None:
        super().__init__(tool_name, message, cause, code="RESULT_DECODE")


class TransportError(DeterminishticError):
    def __init__(
        self, message: str, cause: Exception | None = None, code: str = "TRANSPORT"
    ) -> None:
        super().__init__(code, message, cause)


class ConnectionClosedError(TransportError):
    def __init__(self) -> None:
        super().__init__("connection closed", code="CONNECTION_CLOSED")


class IncompleteError(DeterminishticError):
    def __init__(self, message: str = "engine ended without returning a result") -> None:
        super().__init__("INCOMPLETE", message)


class ToolFailure(DeterminishticError):
    """Raised by a tool callback to report failure to the engine.

    Recoverable failures are sent back to the engine as a tool error so it can
    adjust and retry. Pass ``recoverable=False`` to abort the session instead.
    """

    def __init__(
        self,
        message: str,
        recoverable: bool = True,
        tool_name: str = "",
        cause: Exception | None = None,
    ) -> None:
        super().__init__("TOOL_FAILURE", message, cause)
        self.recoverable = recoverable
        self.tool_name = tool_name


class SessionAbortedError(DeterminishticError):
    """A callback raised a non-recoverable ToolFailure and its session ended.

    Only the session that dispatched the failing tool is aborted. When that
    session was nested inside another tool callback, the enclosing session
    answers its own tool call with an error and carries on.
    """

    def __init__(self, failure: ToolFailure) -> None:
        super().__init__(
            "SESSION_ABORTED", f"tool '{failure.tool_name}' aborted the session: {failure}", failure
        )
        self.tool_name = failure.tool_name


class LLMError(TransportError):
    def __init__(
        self,
        code: str,
        provider: str,
        message: str,
        status_code: int | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(message, cause, code=code)
        self.provider = provider
        self.status_code = status_code
