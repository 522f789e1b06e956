"""Schema Validation — evaluate a raw payload against a declarative schema.

Invariants:
    - Every applicable rule is evaluated; all violations are reported, in order
    - Pure: no logging, no IO, never raises for bad input (returns a result instead)
    - Messages name the offending field in double quotes, e.g. '"title" is required'

Design Decisions:
    - Pydantic models are the declarative rule sets; this module only runs them and
      turns pydantic's error records into short human-readable sentences
    - Non-object payloads rejected up front with a single message
"""

import re
from dataclasses import dataclass, field
from typing import Any

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of validate_input: either data or errors, never both."""
    valid: bool
    data: BaseModel | None = None
    errors: list[str] = field(default_factory=list)


def validate_input(payload: Any, schema: type[BaseModel]) -> ValidationResult:
    """Validate payload against schema, collecting every violation."""
    if not isinstance(payload, dict):
        return ValidationResult(False, errors=['"value" must be of type object'])
    try:
        return ValidationResult(True, data=schema.model_validate(payload))
    except PydanticValidationError as exc:
        return ValidationResult(
            False, errors=[format_error(e) for e in exc.errors()],
        )


def format_error(error: dict) -> str:
    """Render one pydantic error record as a sentence about its field."""
    name = ".".join(str(part) for part in error.get("loc", ())) or "value"
    kind = error.get("type", "")
    ctx = error.get("ctx") or {}

    if kind == "missing":
        return f'"{name}" is required'
    if kind == "extra_forbidden":
        return f'"{name}" is not allowed'
    if kind == "string_type":
        return f'"{name}" must be a string'
    if kind == "string_too_short":
        return f'"{name}" is not allowed to be empty'
    if kind in ("enum", "literal_error"):
        choices = re.findall(r"'([^']*)'", str(ctx.get("expected", "")))
        return f'"{name}" must be one of [{", ".join(choices)}]'
    if kind == "value_error" and "error" in ctx:
        return f'"{name}" {ctx["error"]}'
    return f'"{name}" {error.get("msg", "is invalid")}'
