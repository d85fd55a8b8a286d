"""Group Swagger operations into services, one per tag.

Operations with zero or several tags, or without an operationId, are
skipped and reported. Parameter and response schemas go through the same
type resolver as model properties.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any, Optional

from .dependencies import DependencyResolver
from .diagnostics import Diagnostics
from .loader import HTTP_METHODS, get_paths, resolve_ref
from .models import Model
from .naming import params_class_name, to_path_expression
from .schema_parser import VOID, Reference, TypeExpr, is_unknown, render, resolve_type

_SUCCESS_CODE = re.compile(r"2\d\d")
_SCALAR_KINDS = ("void", "string", "number", "boolean")
_COLLECTION_LOCATIONS = ("query", "header")

RESULT_KINDS = ("void", "string", "number", "boolean", "enum", "object", "unknown")


@dataclass
class Parameter:
    name: str
    location: str
    type: TypeExpr
    required: bool = False
    description: str = ""
    is_array: bool = False
    collection_format: Optional[str] = None
    last: bool = False

    @property
    def type_name(self) -> str:
        return render(self.type)


@dataclass
class Response:
    code: str
    type: TypeExpr

    @property
    def type_name(self) -> str:
        return render(self.type)


@dataclass
class Operation:
    id: str
    method: str
    path: str
    parameters: list[Parameter] = field(default_factory=list)
    responses: dict[str, Response] = field(default_factory=dict)
    result_type: TypeExpr = VOID
    result_kind: str = "void"
    description: str = ""

    @property
    def path_expression(self) -> str:
        return to_path_expression(self.path)

    @property
    def params_class(self) -> str | None:
        return params_class_name(self.id) if self.parameters else None

    @property
    def result_type_name(self) -> str:
        return render(self.result_type)


@dataclass
class Service:
    name: str
    operations: list[Operation] = field(default_factory=list)
    dependencies: list[str] = field(default_factory=list)


def _merged_parameters(
    spec: dict[str, Any],
    path_params: list[dict[str, Any]],
    op_params: list[dict[str, Any]],
) -> list[dict[str, Any]]:
    """Resolve $refs and let operation parameters override path-level ones."""
    merged: dict[tuple[Any, Any], dict[str, Any]] = {}
    for param in [*path_params, *op_params]:
        if "$ref" in param:
            param = resolve_ref(spec, param["$ref"])
        merged[(param.get("name"), param.get("in"))] = param
    return list(merged.values())


def _build_parameter(param: dict[str, Any]) -> Parameter:
    location = param.get("in", "query")
    schema = param.get("schema")
    param_type = resolve_type(schema if schema is not None else param)
    is_array = param.get("type") == "array"
    return Parameter(
        name=param.get("name", ""),
        location=location,
        type=param_type,
        required=param.get("required") is True or location == "path",
        description=param.get("description") or "",
        is_array=is_array,
        collection_format=(
            param.get("collectionFormat")
            if is_array and location in _COLLECTION_LOCATIONS
            else None
        ),
    )


def _sort_parameters(params: list[Parameter]) -> list[Parameter]:
    """Required first, then optional; by name descending within each group."""
    ordered = sorted(params, key=lambda p: p.name, reverse=True)
    ordered.sort(key=lambda p: not p.required)
    for param in ordered:
        param.last = False
    if ordered:
        ordered[-1].last = True
    return ordered


def _build_responses(operation: dict[str, Any]) -> tuple[dict[str, Response], TypeExpr]:
    responses: dict[str, Response] = {}
    result_type: TypeExpr | None = None
    for code, response in (operation.get("responses") or {}).items():
        code = str(code)
        schema = (response or {}).get("schema")
        if schema is None:
            continue
        response_type = resolve_type(schema)
        if result_type is None and _SUCCESS_CODE.fullmatch(code):
            result_type = response_type
        responses[code] = Response(code=code, type=response_type)
    return responses, result_type if result_type is not None else VOID


def classify_result(result_type: TypeExpr, models: dict[str, Model]) -> str:
    """Return the result kind of an operation; see RESULT_KINDS."""
    name = render(result_type)
    if name in _SCALAR_KINDS:
        return name
    if isinstance(result_type, Reference):
        model = models.get(result_type.name)
        if model is not None:
            return "enum" if model.is_enum else "object"
    return "unknown"


def _operation_description(operation: dict[str, Any], params: list[Parameter]) -> str:
    doc = operation.get("description") or ""
    for param in params:
        doc += f"\n@param {param.name} - {param.description}"
    return doc


def _service_dependencies(service: Service, models: dict[str, Model]) -> list[str]:
    resolver = DependencyResolver(models)
    for op in service.operations:
        for response in op.responses.values():
            resolver.add_type(response.type)
        for param in op.parameters:
            resolver.add_type(param.type)
    return resolver.get()


def build_services(
    spec: dict[str, Any],
    models: dict[str, Model],
    diagnostics: Diagnostics,
) -> dict[str, Service]:
    """Build services keyed by tag, in order of first appearance."""
    services: dict[str, Service] = {}

    for path, path_item in get_paths(spec).items():
        path_item = path_item or {}
        path_params = path_item.get("parameters") or []

        for method, operation in path_item.items():
            if method.lower() not in HTTP_METHODS or not operation:
                continue

            tags = operation.get("tags") or []
            if not tags:
                diagnostics.info(f"Ignoring {path}.{method} because it has no tags")
                continue
            if len(tags) > 1:
                diagnostics.info(
                    f"Ignoring {path}.{method} because it has multiple tags: {', '.join(tags)}"
                )
                continue

            operation_id = operation.get("operationId")
            if not operation_id:
                diagnostics.info(f"Ignoring {path}.{method} because it has no id")
                continue

            raw_params = _merged_parameters(spec, path_params, operation.get("parameters") or [])
            params = _sort_parameters([_build_parameter(p) for p in raw_params])
            for param in params:
                if is_unknown(param.type):
                    diagnostics.warning(
                        f"Parameter {param.name} of {operation_id} has no recognized type, using any"
                    )

            responses, result_type = _build_responses(operation)

            tag = tags[0]
            service = services.setdefault(tag, Service(name=tag))
            service.operations.append(Operation(
                id=operation_id,
                method=method.lower(),
                path=path,
                parameters=params,
                responses=responses,
                result_type=result_type,
                result_kind=classify_result(result_type, models),
                description=_operation_description(operation, params),
            ))

    for service in services.values():
        service.dependencies = _service_dependencies(service, models)
    return services
