"""Build the model graph from Swagger definitions.

Three passes:
  1. kind, own properties / enum values, parent *name*
  2. parent name -> Model, child appended to parent.subclasses
  3. direct dependencies (parent, subclasses, property types)

The second pass lets a definition extend another declared after it.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional

from .dependencies import DependencyResolver
from .diagnostics import Diagnostics, SchemaError
from .naming import to_enum_name
from .schema_parser import TypeExpr, is_unknown, render, resolve_type, simple_ref

OBJECT = "object"
ENUM = "enum"


@dataclass
class Property:
    name: str
    type: TypeExpr
    required: bool = False
    description: str = ""
    last: bool = False

    @property
    def type_name(self) -> str:
        return render(self.type)


@dataclass
class EnumValue:
    name: str
    value: str
    last: bool = False


@dataclass(eq=False)
class Model:
    name: str
    kind: str
    description: str = ""
    properties: list[Property] = field(default_factory=list)
    enum_values: list[EnumValue] = field(default_factory=list)
    parent_name: Optional[str] = None
    parent: Optional["Model"] = None
    subclasses: list["Model"] = field(default_factory=list)
    dependencies: list[str] = field(default_factory=list)

    @property
    def is_object(self) -> bool:
        return self.kind == OBJECT

    @property
    def is_enum(self) -> bool:
        return self.kind == ENUM

    def __repr__(self) -> str:
        return f"Model({self.name!r}, {self.kind})"


def _build_properties(
    model_name: str,
    properties: dict[str, Any],
    required: list[str],
    diagnostics: Diagnostics,
) -> list[Property]:
    result = []
    for prop_name, prop_schema in properties.items():
        prop_type = resolve_type(prop_schema)
        if is_unknown(prop_type):
            diagnostics.warning(f"Property {model_name}.{prop_name} has no recognized type, using any")
        result.append(Property(
            name=prop_name,
            type=prop_type,
            required=prop_name in required,
            description=(prop_schema or {}).get("description") or "",
        ))

    result.sort(key=lambda p: p.name)
    if result:
        result[-1].last = True
    return result


def _build_enum_values(name: str, values: list[Any] | None) -> list[EnumValue]:
    if not values:
        raise SchemaError(f"Enum {name} has no possible values")
    result = [EnumValue(name=to_enum_name(str(v)), value=str(v)) for v in values]
    result[-1].last = True
    return result


def _build_model(name: str, definition: dict[str, Any], diagnostics: Diagnostics) -> Model:
    description = definition.get("description") or ""
    all_of = definition.get("allOf")

    if all_of:
        head = all_of[0] or {}
        own = (all_of[1] if len(all_of) > 1 else None) or {}
        return Model(
            name=name,
            kind=OBJECT,
            description=description,
            parent_name=simple_ref(head.get("$ref")),
            properties=_build_properties(
                name, own.get("properties") or {}, own.get("required") or [], diagnostics,
            ),
        )

    if definition.get("type") == "object":
        return Model(
            name=name,
            kind=OBJECT,
            description=description,
            properties=_build_properties(
                name, definition.get("properties") or {}, definition.get("required") or [], diagnostics,
            ),
        )

    if definition.get("type") == "string":
        return Model(
            name=name,
            kind=ENUM,
            description=description,
            enum_values=_build_enum_values(name, definition.get("enum")),
        )

    raise SchemaError(f"Unhandled model type for {name}")


def _link_hierarchy(models: dict[str, Model]) -> None:
    for model in models.values():
        if not model.is_object or not model.parent_name:
            continue
        parent = models.get(model.parent_name)
        if parent is None:
            raise SchemaError(f"Model {model.name} extends unknown model {model.parent_name}")
        model.parent = parent
        parent.subclasses.append(model)


def _resolve_dependencies(models: dict[str, Model]) -> None:
    for model in models.values():
        if not model.is_object:
            continue
        resolver = DependencyResolver(models, model.name)
        if model.parent is not None:
            resolver.add_name(model.parent.name)
        for child in model.subclasses:
            resolver.add_name(child.name)
        for prop in model.properties:
            resolver.add_type(prop.type)
        model.dependencies = resolver.get()


def build_models(definitions: dict[str, Any] | None, diagnostics: Diagnostics) -> dict[str, Model]:
    """Build every definition into a Model, keyed by name in document order."""
    models: dict[str, Model] = {}
    for name, definition in (definitions or {}).items():
        models[name] = _build_model(name, definition or {}, diagnostics)

    _link_hierarchy(models)
    _resolve_dependencies(models)
    return models
