"""Base classes shared by every tool exposed by the server."""

from abc import ABC, abstractmethod
from dataclasses import dataclass


class ToolError(Exception):
    """Raised when a tool cannot carry out a request."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message: str = message


@dataclass
class ToolExecResult:
    """Result of a tool execution."""

    output: str | None = None
    error: str | None = None
    error_code: int = 0


@dataclass
class ToolParameter:
    """A parameter accepted by a tool."""

    name: str
    type: str | list[str]
    description: str
    enum: list[str] | None = None
    required: bool = True


ToolCallArguments = dict[str, str | int | float | bool | dict[str, object] | list[object] | None]


class Tool(ABC):
    """Base class for all tools."""

    @property
    def name(self) -> str:
        return self.get_name()

    @abstractmethod
    def get_name(self) -> str:
        pass

    @abstractmethod
    def get_description(self) -> str:
        pass

    @abstractmethod
    def get_parameters(self) -> list[ToolParameter]:
        pass

    @abstractmethod
    async def execute(self, arguments: ToolCallArguments) -> ToolExecResult:
        pass
