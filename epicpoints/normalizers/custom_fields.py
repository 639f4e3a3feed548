import json
import math
from collections.abc import Sequence
from typing import Any

from epicpoints.errors import DecodeError
from epicpoints.models.webhooks.jira import STATIC_FIELD_KEYS, CustomFieldValue

CUSTOM_FIELD_PREFIX = "customfield_"
EVENT_FIELDS_PATH: tuple[str, ...] = ("issue", "fields")


def load_json(body: bytes | str) -> Any:
    try:
        return json.loads(body)
    except (UnicodeDecodeError, ValueError) as exc:
        raise DecodeError(f"payload is not valid JSON: {exc}") from exc


def extract_custom_fields(
    body: bytes | str,
    path: Sequence[str] = EVENT_FIELDS_PATH,
    prefix: str = CUSTOM_FIELD_PREFIX,
) -> dict[str, CustomFieldValue]:
    """Collect the tenant-specific custom fields of an issue payload.

    Only the direct children of the object at ``path`` are inspected. Keys
    starting with ``prefix`` are kept when their value is a JSON number
    (as ``float``) or a JSON string; ``null``, booleans, objects and arrays
    are skipped. A missing ``path`` yields an empty mapping.

    Raises :class:`DecodeError` if ``body`` is not JSON, if ``path`` points at
    something other than an object, or if a number does not fit a finite
    64-bit float.
    """
    node = load_json(body)
    for step in path:
        if not isinstance(node, dict) or step not in node:
            return {}
        node = node[step]

    if not isinstance(node, dict):
        raise DecodeError(
            f"expected an object at {'.'.join(path)}, got {type(node).__name__}"
        )

    found: dict[str, CustomFieldValue] = {}
    for key, value in node.items():
        if not key.startswith(prefix) or key in STATIC_FIELD_KEYS:
            continue
        # bool is an int subclass but a JSON boolean, not a number
        if isinstance(value, bool):
            continue
        if isinstance(value, (int, float)):
            found[key] = _to_float(key, value)
        elif isinstance(value, str):
            found[key] = value
    return found


def _to_float(key: str, value: int | float) -> float:
    try:
        number = float(value)
    except OverflowError as exc:
        raise DecodeError(f"{key}: number {value} does not fit a float") from exc
    if not math.isfinite(number):
        raise DecodeError(f"{key}: number {value} is not finite")
    return number
