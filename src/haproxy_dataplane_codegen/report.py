from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Mapping, Sequence

from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from .errors import SpecDocumentError

_HTTP_METHODS = {"get", "put", "post", "delete", "patch", "head", "options", "trace"}


def _to_builtin(value: Any) -> Any:
    if isinstance(value, Mapping):
        return {str(k): _to_builtin(v) for k, v in value.items()}
    if isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray)):
        return [_to_builtin(v) for v in value]
    return value


def load_spec(path: Path) -> dict[str, Any]:
    try:
        with path.open("r", encoding="utf-8") as file:
            if path.suffix.lower() == ".json":
                data = json.load(file)
            else:
                data = YAML(typ="safe").load(file)
    except (json.JSONDecodeError, YAMLError, UnicodeDecodeError) as exc:
        raise SpecDocumentError(f"{path}: invalid spec document: {exc}") from exc
    if not isinstance(data, Mapping):
        raise SpecDocumentError(f"{path}: expected a mapping at the top of the document")
    return _to_builtin(data)


def _count_operations(paths: dict[str, Any]) -> int:
    count = 0
    for item in paths.values():
        if not isinstance(item, dict):
            continue
        for key in item.keys():
            if key.lower() in _HTTP_METHODS:
                count += 1
    return count


def _schemas(document: dict[str, Any]) -> dict[str, Any]:
    # Swagger 2.0 keeps models under definitions, OpenAPI 3 under components.
    if isinstance(document.get("definitions"), dict):
        return document["definitions"]
    components = document.get("components") or {}
    schemas = components.get("schemas") if isinstance(components, dict) else None
    return schemas if isinstance(schemas, dict) else {}


def render(path: Path, document: dict[str, Any]) -> list[str]:
    info = document.get("info") or {}
    if not isinstance(info, dict):
        info = {}
    paths = document.get("paths") or {}
    if not isinstance(paths, dict):
        paths = {}
    spec_version = document.get("swagger") or document.get("openapi") or "unknown"

    return [
        f"Spec: {path}",
        f"- Title: {info.get('title', 'unknown')}",
        f"- API version: {info.get('version', 'unknown')}",
        f"- Format: {'swagger' if 'swagger' in document else 'openapi'} {spec_version}",
        f"- Paths: {len(paths)}",
        f"- Operations: {_count_operations(paths)}",
        f"- Schemas: {len(_schemas(document))}",
    ]


def report(path: Path) -> str:
    if not path.is_file():
        raise FileNotFoundError(f"Missing OpenAPI spec: {path}")
    return "\n".join(render(path, load_spec(path))) + "\n"
