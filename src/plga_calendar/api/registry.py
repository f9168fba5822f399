"""Name-addressable registry of the calendar operations exposed to the CLI and HTTP."""

from __future__ import annotations

import inspect
from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterable, List, Optional, Tuple, get_args, get_type_hints

JsonSchema = Dict[str, Any]

_SCALAR_TYPES = {str: "string", int: "integer", float: "number", bool: "boolean"}
_NONE = type(None)


def _json_type(annotation: Any) -> str:
    # Optional[X] collapses to X; anything richer is passed as a string.
    members = [arg for arg in get_args(annotation) if arg is not _NONE] or [annotation]
    return _SCALAR_TYPES.get(members[0], "string")


@dataclass(frozen=True)
class ToolParameter:
    name: str
    json_type: str
    required: bool
    default: Any = None

    def schema(self) -> JsonSchema:
        entry: JsonSchema = {"type": self.json_type}
        if isinstance(self.default, (str, int, float, bool)):
            entry["default"] = self.default
        return entry


@dataclass(frozen=True)
class ApiFunction:
    name: str
    func: Callable[..., Any]
    description: str
    category: str
    tags: Tuple[str, ...]
    parameters: Tuple[ToolParameter, ...]

    @classmethod
    def from_callable(
        cls, name: str, func: Callable[..., Any], *, description: str, category: str, tags: Iterable[str]
    ) -> "ApiFunction":
        # Annotations are strings under ``from __future__ import annotations``.
        hints = get_type_hints(func)
        parameters = tuple(
            ToolParameter(
                name=param.name,
                json_type=_json_type(hints.get(param.name, str)),
                required=param.default is inspect.Parameter.empty,
                default=None if param.default is inspect.Parameter.empty else param.default,
            )
            for param in inspect.signature(func).parameters.values()
        )
        return cls(name, func, description, category, tuple(tags), parameters)

    def describe(self) -> Dict[str, Any]:
        schema: JsonSchema = {
            "type": "object",
            "properties": {param.name: param.schema() for param in self.parameters},
        }
        required = [param.name for param in self.parameters if param.required]
        if required:
            schema["required"] = required
        return {
            "name": self.name,
            "description": self.description,
            "category": self.category,
            "tags": list(self.tags),
            "parameters": schema,
        }


REGISTRY: Dict[str, ApiFunction] = {}


def register_api(
    name: str,
    *,
    description: str,
    category: str,
    tags: Optional[Iterable[str]] = None,
) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
    def decorator(func: Callable[..., Any]) -> Callable[..., Any]:
        if name in REGISTRY:
            raise ValueError(f"API function '{name}' is already registered.")
        REGISTRY[name] = ApiFunction.from_callable(
            name, func, description=description, category=category, tags=tags or ()
        )
        return func

    return decorator


def get_api_functions() -> List[ApiFunction]:
    return list(REGISTRY.values())


def call_api(name: str, **kwargs: Any) -> Any:
    try:
        function = REGISTRY[name]
    except KeyError:
        raise KeyError(f"API function '{name}' is not registered.") from None
    return function.func(**kwargs)
