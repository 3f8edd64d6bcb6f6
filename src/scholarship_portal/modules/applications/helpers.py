"""
Application Helpers

Pure functions for decoding and normalizing the apply payload.
Shared by the schemas and the service layer.
"""

import json
from decimal import Decimal, InvalidOperation
from typing import Any


def decode_payload(raw: str | None) -> dict[str, Any]:
    """
    Decode the JSON ``data`` form field.

    A missing or blank field decodes to an empty payload.

    Args:
        raw: The raw form value

    Returns:
        The decoded JSON object

    Raises:
        ValueError: If the value is not valid JSON or not a JSON object
    """
    if raw is None or not raw.strip():
        return {}

    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        raise ValueError(f"data is not valid JSON: {e.msg}") from e

    if not isinstance(data, dict):
        raise ValueError("data must be a JSON object")

    return data


def coerce_amount(value: Any) -> Decimal | None:
    """
    Convert a requested amount to a Decimal.

    Absent, empty, boolean, or non-numeric values become None.
    """
    if value is None or isinstance(value, bool):
        return None

    if isinstance(value, str):
        value = value.strip()
        if not value:
            return None

    try:
        amount = Decimal(str(value))
    except (InvalidOperation, ValueError):
        return None

    if not amount.is_finite():
        return None
    return amount


def serialize_payload(data: dict[str, Any]) -> str:
    """Serialize the payload for verbatim storage."""
    return json.dumps(data, ensure_ascii=False, default=str)
