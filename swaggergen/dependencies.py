"""Model dependency tracking.

DependencyResolver collects the direct dependencies of one model or
service. closure() follows those edges transitively.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Iterable, Mapping

from .schema_parser import TypeExpr, model_names

if TYPE_CHECKING:
    from .models import Model


class DependencyResolver:
    """Ordered, de-duplicated set of known model names.

    Names that are not in models, or equal to own_name, are skipped.
    """

    def __init__(self, models: Mapping[str, "Model"], own_name: str | None = None) -> None:
        self.models = models
        self.own_name = own_name
        self.names: list[str] = []

    def add_name(self, name: str | None) -> None:
        if not name or name == self.own_name or name in self.names:
            return
        if name in self.models:
            self.names.append(name)

    def add_type(self, type_expr: TypeExpr) -> None:
        for name in model_names(type_expr):
            self.add_name(name)

    def get(self) -> list[str]:
        return list(self.names)


def closure(seeds: Iterable[str], models: Mapping[str, "Model"]) -> set[str]:
    """Return every model name reachable from seeds, seeds included.

    Safe on cyclic graphs. Names with no model are ignored.
    """
    visited: set[str] = set()
    pending = list(seeds)
    while pending:
        name = pending.pop()
        if name in visited or name not in models:
            continue
        visited.add(name)
        pending.extend(dep for dep in models[name].dependencies if dep not in visited)
    return visited
