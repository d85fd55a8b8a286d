"""Keep only the requested tags and drop models no kept service uses."""

from __future__ import annotations

from typing import Iterable, Union

from .dependencies import closure
from .diagnostics import Diagnostics
from .models import Model
from .options import parse_tags
from .services import Service


def apply_tag_filter(
    models: dict[str, Model],
    services: dict[str, Service],
    include_tags: Union[str, Iterable[str], None],
    ignore_unused_models: bool,
    diagnostics: Diagnostics,
) -> None:
    """Filter services and models in place.

    include_tags may be a list or a comma-separated string. With no
    include_tags every service is kept. Unused models are still
    removed when ignore_unused_models is set.
    """
    included = set(parse_tags(include_tags) or ())
    for name in list(services):
        if included and name not in included:
            diagnostics.info(f"Ignoring service {name} because it was not included")
            del services[name]

    if not ignore_unused_models:
        return

    seeds = [dep for service in services.values() for dep in service.dependencies]
    used = closure(seeds, models)
    for name in list(models):
        if name not in used:
            diagnostics.info(f"Ignoring model {name} because it was not used by any service")
            del models[name]
