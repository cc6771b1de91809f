from __future__ import annotations

import inspect
import types
from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Any, Callable, Dict, Iterable, List, Optional, Union, get_args, get_origin, get_type_hints

JsonSchema = Dict[str, Any]

_SCALARS = {str: "string", int: "integer", float: "number", bool: "boolean"}


def _unwrap_optional(annotation: Any) -> Any:
    if get_origin(annotation) in (Union, types.UnionType):
        args = [arg for arg in get_args(annotation) if arg is not type(None)]
        return args[0] if len(args) == 1 else annotation
    return annotation


def _annotation_schema(annotation: Any) -> JsonSchema:
    annotation = _unwrap_optional(annotation)
    if isinstance(annotation, type) and issubclass(annotation, Enum):
        return {"type": "string", "enum": [member.value for member in annotation]}
    if annotation is date:
        return {"type": "string", "format": "date"}
    if annotation in _SCALARS:
        return {"type": _SCALARS[annotation]}
    origin = get_origin(annotation) or annotation
    if origin in (dict, Dict):
        return {"type": "object"}
    if origin in (list, List, tuple):
        return {"type": "array"}
    return {"type": "string"}


def _coerce(name: str, value: Any, annotation: Any) -> Any:
    """Turn JSON-friendly strings into the enum or date a layout function expects."""

    target = _unwrap_optional(annotation)
    if not isinstance(value, str):
        return value
    try:
        if isinstance(target, type) and issubclass(target, Enum):
            return target(value)
        if target is date:
            return date.fromisoformat(value)
    except ValueError as exc:
        raise ValueError(f"Invalid value for '{name}': {value!r}") from exc
    return value


@dataclass(frozen=True)
class ApiFunction:
    name: str
    func: Callable[..., Any]
    description: str
    category: str
    tags: tuple[str, ...]
    signature: inspect.Signature
    hints: Dict[str, Any] = field(default_factory=dict)

    def annotation(self, param: inspect.Parameter) -> Any:
        return self.hints.get(param.name, param.annotation)

    @property
    def parameter_schema(self) -> JsonSchema:
        schema: JsonSchema = {"type": "object", "properties": {}, "required": []}
        for param in self.signature.parameters.values():
            prop = _annotation_schema(self.annotation(param))
            if param.default is inspect.Parameter.empty:
                schema["required"].append(param.name)
            elif isinstance(param.default, (str, int, float, bool)):
                prop["default"] = param.default
            schema["properties"][param.name] = prop
        if not schema["required"]:
            schema.pop("required")
        return schema

    def invoke(self, **kwargs: Any) -> Any:
        bound = self.signature.bind(**kwargs)
        for key, value in bound.arguments.items():
            bound.arguments[key] = _coerce(key, value, self.annotation(self.signature.parameters[key]))
        return self.func(*bound.args, **bound.kwargs)


def _type_hints(func: Callable[..., Any]) -> Dict[str, Any]:
    # Annotations are strings under ``from __future__ import annotations``.
    try:
        return get_type_hints(func)
    except (NameError, TypeError):
        return {}


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
        REGISTRY[name] = ApiFunction(
            name=name,
            func=func,
            description=description,
            category=category,
            tags=tuple(tags or ()),
            signature=inspect.signature(func),
            hints=_type_hints(func),
        )
        return func

    return decorator


def get_api_functions(category: Optional[str] = None) -> List[ApiFunction]:
    return [func for func in REGISTRY.values() if category is None or func.category == category]


def call_api(name: str, **kwargs: Any) -> Any:
    """Call a registered function by name, coercing enum and ISO date strings."""

    if name not in REGISTRY:
        raise KeyError(f"API function '{name}' is not registered.")
    return REGISTRY[name].invoke(**kwargs)
