"""Render templates and write generated output.

Takes the context from context_builder and writes, under the output dir:
models/<model>.ts, services/<service>.service.ts, models.ts, services.ts,
api.module.ts and api-configuration.ts.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import jinja2

from .options import GeneratorOptions


def ts_string(value: Any) -> str:
    """Escape a value for use inside a single-quoted TypeScript literal."""
    return str(value).replace("\\", "\\\\").replace("'", "\\'").replace("\n", "\\n")


def _environment(template_dir: Path) -> jinja2.Environment:
    env = jinja2.Environment(
        loader=jinja2.FileSystemLoader(str(template_dir)),
        keep_trailing_newline=True,
        trim_blocks=True,
        lstrip_blocks=True,
        undefined=jinja2.StrictUndefined,
    )
    env.filters["ts_string"] = ts_string
    return env


def _write(env: jinja2.Environment, template: str, context: dict[str, Any], path: Path) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(env.get_template(template).render(**context))
    print(f"Wrote {path}")
    return path


def generate(context: dict[str, Any], output_dir: Path, options: GeneratorOptions | None = None) -> list[Path]:
    """Render every template for the context. Returns the written paths."""
    options = options or GeneratorOptions()
    env = _environment(options.templates)
    output_dir = Path(output_dir)
    written = []

    for model in context["models"]:
        written.append(_write(env, "model.ts.j2", {"model": model}, output_dir / "models" / f"{model['file']}.ts"))
    if options.model_index:
        written.append(_write(env, "models.ts.j2", context, output_dir / "models.ts"))

    for service in context["services"]:
        written.append(_write(
            env, "service.ts.j2", {"service": service}, output_dir / "services" / f"{service['file']}.ts",
        ))
    if options.service_index:
        written.append(_write(env, "services.ts.j2", context, output_dir / "services.ts"))
    if options.api_module:
        written.append(_write(env, "api.module.ts.j2", context, output_dir / "api.module.ts"))

    written.append(_write(env, "api-configuration.ts.j2", context, output_dir / "api-configuration.ts"))

    print(f"Generated {context['model_count']} models and {context['service_count']} services in {output_dir}")
    return written
