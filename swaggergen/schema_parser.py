"""Resolve Swagger schema fragments into type expressions.

Handles:
- $ref pointers (resolved by name only, never descended into)
- x-type vendor overrides (List<T> / Array<T> notation)
- Scalars: string, integer/number, boolean
- Arrays, recursively
- Inline objects, including additionalProperties index signatures

A type expression is one of Scalar, Reference, ArrayOf or InlineStruct.
render() gives the TypeScript form used by the templates, model_names()
gives the model names a type depends on.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterator, Union


@dataclass(frozen=True)
class Scalar:
    name: str


@dataclass(frozen=True)
class Reference:
    name: str


@dataclass(frozen=True)
class ArrayOf:
    item: "TypeExpr"


@dataclass(frozen=True)
class InlineStruct:
    """An anonymous object type declared inside another schema.

    members keeps declaration order. index is the value type of a
    `[key: string]` signature, if the object is open. nested holds each
    distinct member type once.
    """

    members: tuple[tuple[str, "TypeExpr"], ...] = ()
    index: "TypeExpr | None" = None
    nested: tuple["TypeExpr", ...] = ()


TypeExpr = Union[Scalar, Reference, ArrayOf, InlineStruct]

VOID = Scalar("void")
STRING = Scalar("string")
NUMBER = Scalar("number")
BOOLEAN = Scalar("boolean")
ANY = Scalar("any")

_SCALARS: dict[str, Scalar] = {s.name: s for s in (VOID, STRING, NUMBER, BOOLEAN, ANY)}


def simple_ref(ref: str | None) -> str | None:
    """Return the last segment of a reference: '#/definitions/Pet' -> 'Pet'."""
    if not ref:
        return None
    return ref.rsplit("/", 1)[-1]


def _normalize_generic(text: str) -> str:
    """Turn List<T> / Array<T> (possibly nested) into T[] notation."""
    text = text.strip().replace("List<", "Array<")
    if text.startswith("Array<") and text.endswith(">"):
        return _normalize_generic(text[len("Array<"):-1]) + "[]"
    return text


def _parse_type_name(text: str) -> TypeExpr:
    if not text:
        return VOID
    if text.endswith("[]"):
        return ArrayOf(_parse_type_name(text[:-2]))
    return _SCALARS.get(text) or Reference(text)


def _inline_struct(schema: dict[str, Any]) -> InlineStruct:
    members: list[tuple[str, TypeExpr]] = []
    nested: list[TypeExpr] = []

    for prop_name, prop_schema in (schema.get("properties") or {}).items():
        prop_type = resolve_type(prop_schema)
        members.append((prop_name, prop_type))
        if prop_type not in nested:
            nested.append(prop_type)

    index = None
    additional = schema.get("additionalProperties")
    if isinstance(additional, dict):
        index = resolve_type(additional)
        if index not in nested:
            nested.append(index)

    return InlineStruct(members=tuple(members), index=index, nested=tuple(nested))


def resolve_type(schema: dict[str, Any] | None) -> TypeExpr:
    """Resolve a property, parameter or response schema to a type expression."""
    if schema is None:
        return VOID

    if schema.get("$ref") is not None:
        return Reference(simple_ref(schema["$ref"]) or "")

    if schema.get("x-type"):
        return _parse_type_name(_normalize_generic(str(schema["x-type"])))

    schema_type = schema.get("type")
    if schema_type == "string":
        return STRING
    if schema_type == "array":
        return ArrayOf(resolve_type(schema.get("items")))
    if schema_type in ("integer", "number"):
        return NUMBER
    if schema_type == "boolean":
        return BOOLEAN
    if schema_type == "object":
        return _inline_struct(schema)

    return ANY


def render(type_expr: TypeExpr) -> str:
    """Render a type expression in TypeScript notation."""
    if isinstance(type_expr, (Scalar, Reference)):
        return type_expr.name
    if isinstance(type_expr, ArrayOf):
        return render(type_expr.item) + "[]"

    parts = [f"{name}: {render(member)}" for name, member in type_expr.members]
    if type_expr.index is not None:
        parts.append(f"[key: string]: {render(type_expr.index)}")
    return "{" + ", ".join(parts) + "}"


def _walk_model_names(type_expr: TypeExpr) -> Iterator[str]:
    if isinstance(type_expr, Reference):
        yield type_expr.name
    elif isinstance(type_expr, ArrayOf):
        yield from _walk_model_names(type_expr.item)
    elif isinstance(type_expr, InlineStruct):
        for nested in type_expr.nested:
            yield from _walk_model_names(nested)


def model_names(type_expr: TypeExpr) -> list[str]:
    """Model names referenced by a type, in first-seen order, without repeats."""
    names: list[str] = []
    for name in _walk_model_names(type_expr):
        if name not in names:
            names.append(name)
    return names


def is_unknown(type_expr: TypeExpr) -> bool:
    return type_expr == ANY
