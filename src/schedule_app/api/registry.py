from __future__ import annotations

import inspect
import types
from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterable, List, Optional, Union, get_args, get_origin, get_type_hints

JsonSchema = Dict[str, Any]

_JSON_TYPES = {
    str: "string",
    int: "integer",
    float: "number",
    bool: "boolean",
    dict: "object",
    list: "array",
}


def _json_type(annotation: Any) -> str:
    origin = get_origin(annotation)
    if origin is None:
        return _JSON_TYPES.get(annotation, "string")
    if origin in (Union, types.UnionType):
        args = [arg for arg in get_args(annotation) if arg is not type(None)]
        return _json_type(args[0]) if args else "string"
    return _JSON_TYPES.get(origin, "string")


@dataclass(frozen=True)
class ApiFunction:
    name: str
    func: Callable[..., Any]
    description: str
    category: str
    tags: tuple[str, ...]
    signature: inspect.Signature
    hints: Dict[str, Any]

    @property
    def parameter_schema(self) -> JsonSchema:
        schema: JsonSchema = {"type": "object", "properties": {}, "required": []}
        for param in self.signature.parameters.values():
            prop: JsonSchema = {"type": _json_type(self.hints.get(param.name, str))}
            if param.default is inspect.Parameter.empty:
                schema["required"].append(param.name)
            elif isinstance(param.default, (str, int, float, bool)):
                prop["default"] = param.default
            schema["properties"][param.name] = prop
        if not schema["required"]:
            schema.pop("required")
        return schema

    def describe(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "description": self.description,
            "category": self.category,
            "tags": list(self.tags),
            "parameters": self.parameter_schema,
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
        REGISTRY[name] = ApiFunction(
            name=name,
            func=func,
            description=description,
            category=category,
            tags=tuple(tags or ()),
            signature=inspect.signature(func),
            hints=get_type_hints(func),
        )
        return func

    return decorator


def get_api_functions(category: Optional[str] = None) -> List[ApiFunction]:
    functions = list(REGISTRY.values())
    if category:
        functions = [func for func in functions if func.category == category]
    return functions


def call_api(name: str, **kwargs: Any) -> Any:
    if name not in REGISTRY:
        raise KeyError(f"API function '{name}' is not registered.")
    return REGISTRY[name].func(**kwargs)
