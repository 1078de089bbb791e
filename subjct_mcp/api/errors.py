"""Exceptions raised while dispatching SUBJCT tool calls."""


class SubjctError(Exception):
    """Base class for errors raised by the SUBJCT MCP server"""


class APIRequestError(SubjctError):
    """Raised when the SUBJCT API answers with a non-2xx status

    Args:
        status: HTTP status code
        reason: HTTP status text
        body: Raw response body text
    """

    def __init__(self, status: int, reason: str, body: str):
        self.status = status
        self.reason = reason
        self.body = body
        super().__init__(f"API request failed: {status} {reason} - {body}")


class APITimeoutError(SubjctError):
    """Raised when a SUBJCT API request exceeds the configured timeout"""

    def __init__(self, url: str, timeout: float):
        self.url = url
        self.timeout = timeout
        super().__init__(f"Request to {url} timed out after {timeout} seconds")


class UnknownToolError(SubjctError):
    """Raised when a tool name has no registered endpoint"""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Unknown tool: {name}")


class ArgumentValidationError(SubjctError):
    """Raised when tool arguments do not match the tool's input schema

    Args:
        tool_name: Tool whose schema was violated
        message: Validator message
        path: Dotted path to the offending field, empty for the top level
    """

    def __init__(self, tool_name: str, message: str, path: str = ""):
        self.tool_name = tool_name
        self.path = path
        location = f" at '{path}'" if path else ""
        super().__init__(f"Invalid arguments for '{tool_name}'{location}: {message}")


__all__ = [
    "SubjctError",
    "APIRequestError",
    "APITimeoutError",
    "UnknownToolError",
    "ArgumentValidationError",
]
