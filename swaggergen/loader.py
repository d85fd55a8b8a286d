"""Load a Swagger 2.0 document from a file or an http(s) URL.

Also resolves local $ref pointers and builds the API root URL.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import httpx

from .diagnostics import LoaderError, SchemaError

SUPPORTED_VERSION = "2.0"
HTTP_METHODS = ("get", "put", "post", "delete", "options", "head", "patch")


def _is_url(source: str) -> bool:
    return source.startswith(("http://", "https://"))


def _fetch(url: str, client: httpx.Client | None) -> str:
    owns_client = client is None
    client = client or httpx.Client(follow_redirects=True, timeout=30)
    try:
        response = client.get(url)
    except httpx.HTTPError as e:
        raise LoaderError(f"Error reading swagger JSON URL {url}: {e}") from e
    finally:
        if owns_client:
            client.close()

    if response.status_code != 200:
        raise LoaderError(
            f"Server responded with status code {response.status_code} the request to {url}"
        )
    return response.text


def _read(path: Path) -> str:
    if not path.exists():
        raise LoaderError(f"Swagger definition file doesn't exist: {path}")
    try:
        return path.read_text(encoding="utf-8")
    except OSError as e:
        raise LoaderError(f"Error reading swagger JSON file {path}: {e}") from e


def load_spec(source: str | Path, client: httpx.Client | None = None) -> dict[str, Any]:
    """Load and parse the document, checking it is a Swagger 2.0 object."""
    text = _fetch(source, client) if isinstance(source, str) and _is_url(source) else _read(Path(source))
    try:
        spec = json.loads(text)
    except json.JSONDecodeError as e:
        raise SchemaError(f"Invalid swagger content: {e}") from e
    check_version(spec)
    return spec


def check_version(spec: Any) -> None:
    if not isinstance(spec, dict):
        raise SchemaError("Invalid swagger content")
    if spec.get("swagger") != SUPPORTED_VERSION:
        raise SchemaError(
            f"Invalid swagger specification. Must be a {SUPPORTED_VERSION}. Currently {spec.get('swagger')}"
        )


def get_paths(spec: dict[str, Any]) -> dict[str, Any]:
    """Extract paths from the spec."""
    return spec.get("paths") or {}


def get_definitions(spec: dict[str, Any]) -> dict[str, Any]:
    """Extract type definitions from the spec."""
    return spec.get("definitions") or {}


def resolve_ref(spec: dict[str, Any], ref: str) -> dict[str, Any]:
    """Resolve a local '#/...' pointer in the spec."""
    if not ref.startswith("#/"):
        raise SchemaError(f"Resolved references must start with #/. Current: {ref}")
    node: Any = spec
    for part in filter(None, ref[2:].split("/")):
        part = part.replace("~1", "/").replace("~0", "~")
        if not isinstance(node, dict) or part not in node:
            raise SchemaError(f"Reference {ref} does not resolve")
        node = node[part]
    return {} if node is spec else node


def root_url(spec: dict[str, Any]) -> str:
    schemes = spec.get("schemes") or []
    scheme = schemes[0] if schemes else "http"
    host = spec.get("host") or "localhost"
    base_path = spec.get("basePath") or "/"
    return f"{scheme}://{host}{base_path}"
