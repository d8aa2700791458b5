from __future__ import annotations

from typing import Iterable


class TravelToolError(Exception):
    """Base class for failures reported back to the caller as error responses."""
    kind = "ToolError"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class MissingArgumentError(TravelToolError):
    kind = "MissingArgument"

    def __init__(self, required: Iterable[str]) -> None:
        names = list(required)
        label = "argument" if len(names) == 1 else "arguments"
        super().__init__(f"Missing required {label}: {', '.join(names)}")
        self.required = names


class InvalidArgumentError(TravelToolError):
    kind = "InvalidArgument"


class NotFoundError(TravelToolError):
    kind = "NotFound"


class InvalidCategoryError(TravelToolError):
    kind = "InvalidCategory"


class ConfigurationError(TravelToolError):
    kind = "ConfigurationError"


class UpstreamError(TravelToolError):
    """Any network or decode failure from a third-party API, wrapped."""
    kind = "UpstreamError"


class UnknownToolError(TravelToolError):
    kind = "UnknownTool"

    def __init__(self, name: str) -> None:
        super().__init__(f"Unknown tool: {name}")
        self.name = name
