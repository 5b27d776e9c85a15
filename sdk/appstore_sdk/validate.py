"""
Version payload validation for the App Store SDK.

This module checks versions before they are published:
- Required fields (name, dockerTag, maturity)
- Maturity is a known channel level
- Helpful error messages with suggestions for misspelled keys

Invariants:
    - Validation errors are deterministic
    - All problems are reported at once, not just the first
"""

from __future__ import annotations

from difflib import get_close_matches
from typing import Any, Dict, List, Tuple

from .errors import ValidationError
from .types import REQUIRED_PUBLISH_FIELDS, Maturity


def validate_version(payload: Dict[str, Any]) -> Tuple[bool, List[str]]:
    """Validate a version payload for publishing.

    Args:
        payload: Version fields to publish

    Returns:
        Tuple of (is_valid, list_of_errors)
    """
    errors: List[str] = []
    other_keys = [key for key in payload if key not in REQUIRED_PUBLISH_FIELDS]

    for field_name in REQUIRED_PUBLISH_FIELDS:
        value = payload.get(field_name)
        if value is None or value == "":
            message = f"Field '{field_name}' is required"
            suggestions = get_close_matches(field_name, other_keys, n=1)
            if suggestions:
                message += f". Did you mean to rename '{suggestions[0]}'?"
            errors.append(message)

    maturity = payload.get("maturity")
    if maturity:
        try:
            Maturity.parse(maturity)
        except ValidationError as e:
            errors.append(e.message)

    return len(errors) == 0, errors


def ensure_publishable(payload: Dict[str, Any]) -> Dict[str, Any]:
    """Validate a version payload and normalize its maturity.

    Args:
        payload: Version fields to publish

    Returns:
        Copy of the payload with ``maturity`` as a plain string

    Raises:
        ValidationError: If any required field is missing or invalid
    """
    is_valid, errors = validate_version(payload)
    if not is_valid:
        raise ValidationError("; ".join(errors), errors=errors)

    version = dict(payload)
    version["maturity"] = Maturity.parse(version["maturity"]).value
    return version
