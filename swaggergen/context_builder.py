"""Run the generation pipeline and build the Jinja2 template context.

build() turns a loaded document into models and services:
models -> services -> tag filter. build_context() flattens the result
into plain dicts for the templates.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from .diagnostics import Diagnostics
from .loader import check_version, get_definitions, root_url
from .models import Model, build_models
from .naming import service_class_name, service_file_name, to_comments, to_file_name
from .options import GeneratorOptions
from .services import RESULT_KINDS, Operation, Parameter, Service, build_services
from .tag_filter import apply_tag_filter

# collectionFormat -> join separator; "multi" repeats the key instead
_COLLECTION_SEPARATORS = {"csv": ",", "ssv": " ", "tsv": "\\t", "pipes": "|"}


@dataclass
class GenerationResult:
    models: list[Model]
    services: list[Service]
    root_url: str
    diagnostics: Diagnostics = field(default_factory=Diagnostics)


def build(spec: dict[str, Any], options: GeneratorOptions | None = None) -> GenerationResult:
    """Build the filtered model and service graphs. Raises SchemaError on bad input."""
    options = options or GeneratorOptions()
    diagnostics = Diagnostics()
    check_version(spec)

    models = build_models(get_definitions(spec), diagnostics)
    services = build_services(spec, models, diagnostics)
    apply_tag_filter(
        models, services, options.include_tags, options.ignore_unused_models, diagnostics,
    )

    return GenerationResult(
        models=list(models.values()),
        services=list(services.values()),
        root_url=root_url(spec),
        diagnostics=diagnostics,
    )


def _flag_last(items: list[dict[str, Any]]) -> list[dict[str, Any]]:
    for i, item in enumerate(items):
        item["last"] = i == len(items) - 1
    return items


def _model_context(model: Model) -> dict[str, Any]:
    return {
        "name": model.name,
        "class_name": model.name,
        "file": to_file_name(model.name),
        "comments": to_comments(model.description),
        "parent": model.parent.name if model.parent else None,
        "is_object": model.is_object,
        "is_enum": model.is_enum,
        "properties": [
            {
                "name": p.name,
                "type": p.type_name,
                "required": p.required,
                "comments": to_comments(p.description, 1),
                "last": p.last,
            }
            for p in model.properties
        ],
        "enum_values": [
            {"name": v.name, "value": v.value, "last": v.last}
            for v in model.enum_values
        ],
        "subclasses": [child.name for child in model.subclasses],
        "dependencies": [
            {"name": dep, "file": to_file_name(dep)} for dep in model.dependencies
        ],
    }


def _collection_separator(param: Parameter) -> str | None:
    """JS string-literal separator for an array parameter, None for multi."""
    if not param.is_array or param.collection_format == "multi":
        return None
    return _COLLECTION_SEPARATORS.get(param.collection_format or "csv", ",")


def _parameter_context(param: Parameter) -> dict[str, Any]:
    return {
        "name": param.name,
        "in": param.location,
        "type": param.type_name,
        "required": param.required,
        "is_query": param.location == "query",
        "is_path": param.location == "path",
        "is_header": param.location == "header",
        "is_body": param.location == "body",
        "is_array": param.is_array,
        "description": param.description,
        "comments": to_comments(param.description, 2),
        "collection_format": param.collection_format,
        "collection_separator": _collection_separator(param),
        "last": param.last,
    }


def _operation_context(op: Operation) -> dict[str, Any]:
    context = {
        "name": op.id,
        "params_class": op.params_class,
        "method": op.method,
        "path": op.path,
        "path_expression": op.path_expression,
        "comments": to_comments(op.description, 1),
        "result_type": op.result_type_name,
        "result_kind": op.result_kind,
        "parameters": [_parameter_context(p) for p in op.parameters],
        "responses": {
            code: {"code": code, "type": r.type_name} for code, r in op.responses.items()
        },
    }
    for kind in RESULT_KINDS:
        context[f"is_{kind}"] = op.result_kind == kind
    return context


def _service_context(service: Service) -> dict[str, Any]:
    return {
        "name": service.name,
        "class_name": service_class_name(service.name),
        "file": service_file_name(service.name),
        "operations": [_operation_context(op) for op in service.operations],
        "dependencies": [
            {"name": dep, "file": to_file_name(dep)} for dep in service.dependencies
        ],
    }


def build_context(result: GenerationResult) -> dict[str, Any]:
    """Build the full template context from a generation result."""
    models = _flag_last([_model_context(m) for m in result.models])
    services = _flag_last([_service_context(s) for s in result.services])
    return {
        "models": models,
        "services": services,
        "root_url": result.root_url,
        "model_count": len(models),
        "service_count": len(services),
    }
