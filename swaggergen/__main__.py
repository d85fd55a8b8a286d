"""Entry point: python -m swaggergen SOURCE -o OUTPUT

Reads a Swagger 2.0 document (file or URL), generates the TypeScript client.
"""

from __future__ import annotations

from pathlib import Path

import click

from .codegen import generate
from .context_builder import build, build_context
from .diagnostics import WARNING, LoaderError, SchemaError
from .loader import load_spec
from .options import TEMPLATE_DIR, GeneratorOptions


@click.command()
@click.argument("source")
@click.option("-o", "--output", default="src/app/api", show_default=True, type=click.Path(path_type=Path), help="Output directory.")
@click.option("--include-tags", default=None, help="Comma-separated tags to generate services for. Default: all.")
@click.option("--keep-unused-models", is_flag=True, help="Generate models no service uses.")
@click.option("--no-model-index", is_flag=True, help="Skip models.ts.")
@click.option("--no-service-index", is_flag=True, help="Skip services.ts.")
@click.option("--no-api-module", is_flag=True, help="Skip api.module.ts.")
@click.option("--templates", default=TEMPLATE_DIR, type=click.Path(exists=True, file_okay=False, path_type=Path), help="Template directory.")
def main(
    source: str,
    output: Path,
    include_tags: str | None,
    keep_unused_models: bool,
    no_model_index: bool,
    no_service_index: bool,
    no_api_module: bool,
    templates: Path,
) -> None:
    """Generate an Angular API client from a Swagger 2.0 document."""
    options = GeneratorOptions(
        include_tags=include_tags,
        ignore_unused_models=not keep_unused_models,
        model_index=not no_model_index,
        service_index=not no_service_index,
        api_module=not no_api_module,
        templates=templates,
    )

    try:
        spec = load_spec(source)
        result = build(spec, options)
    except (LoaderError, SchemaError) as e:
        click.echo(str(e), err=True)
        raise SystemExit(1)

    generate(build_context(result), output, options)

    for entry in result.diagnostics:
        click.echo(str(entry), err=entry.level == WARNING)


if __name__ == "__main__":
    main()
