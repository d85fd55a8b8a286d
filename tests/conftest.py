"""Shared fixtures: the petstore document and its generation result."""

from __future__ import annotations

import copy
import json
from pathlib import Path
from typing import Any

import pytest

from swaggergen.context_builder import GenerationResult, build
from swaggergen.options import GeneratorOptions

FIXTURES = Path(__file__).parent / "fixtures"
PETSTORE_PATH = FIXTURES / "petstore.json"

_PETSTORE: dict[str, Any] = json.loads(PETSTORE_PATH.read_text(encoding="utf-8"))


@pytest.fixture
def petstore() -> dict[str, Any]:
    """A fresh copy of the petstore document; tests may mutate it."""
    return copy.deepcopy(_PETSTORE)


@pytest.fixture
def petstore_result(petstore) -> GenerationResult:
    """Full generation with every tag and unused models pruned."""
    return build(petstore, GeneratorOptions())
