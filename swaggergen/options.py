"""Generator options."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, Optional, Union

TEMPLATE_DIR = Path(__file__).parent / "templates"


def parse_tags(value: Union[str, Iterable[str], None]) -> Optional[tuple[str, ...]]:
    """Normalize include tags: None, a list, or 'a,b,c'. Blank entries are dropped."""
    if value is None:
        return None
    items = value.split(",") if isinstance(value, str) else value
    tags = tuple(t.strip() for t in items if t and t.strip())
    return tags or None


@dataclass
class GeneratorOptions:
    include_tags: Optional[tuple[str, ...]] = None
    ignore_unused_models: bool = True
    model_index: bool = True
    service_index: bool = True
    api_module: bool = True
    templates: Path = field(default=TEMPLATE_DIR)

    def __post_init__(self) -> None:
        self.include_tags = parse_tags(self.include_tags)
        self.templates = Path(self.templates)
