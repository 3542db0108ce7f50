"""Render service results as JSON for the CLI.

Dataclass bodies (tasks, identities, error info) become objects, datetimes
become ISO-8601 strings. Account records must be sanitized before they get
here; this module does not know which fields are secret.
"""

from __future__ import annotations

import json
from dataclasses import asdict, is_dataclass
from datetime import datetime
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from metriq.service_layer.results import Result


def _jsonable(value: Any) -> Any:
    if is_dataclass(value) and not isinstance(value, type):
        return {k: _jsonable(v) for k, v in asdict(value).items()}
    if isinstance(value, dict):
        return {k: _jsonable(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_jsonable(v) for v in value]
    if isinstance(value, datetime):
        return value.isoformat()
    return value


def result_to_json(result: Result, indent: int | None = 2) -> str:
    """Serialize a result envelope as ``{"success": ..., "body": ...}``."""
    return json.dumps(
        {"success": result.success, "body": _jsonable(result.body)}, indent=indent
    )
