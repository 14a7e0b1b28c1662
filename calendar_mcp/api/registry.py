"""Tool registry: descriptors, handlers, and argument validation."""

from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Dict, List, Mapping, Optional, Tuple, Type, Union

import pydantic

from calendar_mcp.domain.errors import NotFoundError, ValidationError
from calendar_mcp.domain.schemas import ToolParams

Handler = Callable[[Any], Union[Any, Awaitable[Any]]]


@dataclass(frozen=True)
class ToolDescriptor:
    """Name, description and parameter record of one tool."""

    name: str
    description: str
    params: Type[ToolParams]

    def input_schema(self) -> Dict[str, Any]:
        """JSON schema of the parameters, keyed by wire (alias) names."""
        return self.params.model_json_schema(by_alias=True)


def _field_name(loc: Tuple[Any, ...]) -> str:
    return ".".join(str(p) for p in loc) or "arguments"


class ToolRegistry:
    """Holds every tool the server exposes, in registration order."""

    def __init__(self) -> None:
        self._tools: Dict[str, Tuple[ToolDescriptor, Handler]] = {}

    def register(self, descriptor: ToolDescriptor, handler: Handler) -> None:
        if descriptor.name in self._tools:
            raise ValueError(f"Tool already registered: {descriptor.name}")
        self._tools[descriptor.name] = (descriptor, handler)

    def tool(self, name: str, description: str, params: Type[ToolParams]) -> Callable[[Handler], Handler]:
        """Decorator form of register()."""

        def decorator(handler: Handler) -> Handler:
            self.register(ToolDescriptor(name, description, params), handler)
            return handler

        return decorator

    def get(self, name: str) -> Tuple[ToolDescriptor, Handler]:
        try:
            return self._tools[name]
        except KeyError:
            raise NotFoundError(f"Unknown tool: {name}") from None

    def descriptors(self) -> List[ToolDescriptor]:
        return [descriptor for descriptor, _ in self._tools.values()]

    def validate(self, name: str, arguments: Optional[Mapping[str, Any]]) -> ToolParams:
        """Check raw arguments against the tool's parameter record.

        Raises:
            NotFoundError: the tool is not registered.
            ValidationError: arguments are missing or of the wrong type; `fields`
                holds the offending wire names.
        """
        descriptor, _ = self.get(name)
        try:
            return descriptor.params.model_validate(dict(arguments or {}))
        except pydantic.ValidationError as e:
            errors = e.errors()
            fields = list(dict.fromkeys(_field_name(err["loc"]) for err in errors))
            details = "; ".join(f"{_field_name(err['loc'])}: {err['msg']}" for err in errors)
            raise ValidationError(f"Invalid arguments for {name}: {details}", fields=fields) from None
