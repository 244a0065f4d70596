from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Any


# Maximum price: 9,999,999.99 (999,999,999 cents)
MAX_PRICE_CENTS = 999_999_999


class ValidationError(ValueError):
    """400-level input problem."""


class NotFoundError(LookupError):
    """404-level lookup miss (product id, transaction id or receipt number)."""


class InternalError(RuntimeError):
    """500-level failure inside a store or the aggregator."""


@dataclass(frozen=True)
class FieldSpec:
    """How one payload field is coerced: kind is "str", "int" or "money"."""
    kind: str
    nullable: bool = False
    allow_blank: bool = False
    max_length: int | None = None
    minimum: int | None = None


@dataclass(frozen=True)
class ValidationPolicy:
    """
    Central policy layer:
    - fields: what clients are allowed to set (security boundary)
    - required_on_create: fields required for POST
    - ignored_fields: accepted but dropped (clients echo ids back on PUT)
    """
    fields: dict[str, FieldSpec]
    required_on_create: frozenset[str] = frozenset()
    ignored_fields: frozenset[str] = field(default_factory=frozenset)


def coerce_int(key: str, value: Any, *, minimum: int | None = None) -> int:
    """Strict integer coercion: rejects bools, floats and scientific notation."""
    if isinstance(value, bool):
        raise ValidationError(f"{key} must be an integer")

    if isinstance(value, int):
        result = value
    elif isinstance(value, str):
        stripped = value.strip()
        if not stripped:
            raise ValidationError(f"{key} must be an integer")
        if "e" in stripped.lower():
            raise ValidationError(f"{key} must be a plain integer (scientific notation not allowed)")
        if "." in stripped:
            raise ValidationError(f"{key} must be an integer (no decimals)")
        try:
            result = int(stripped)
        except ValueError:
            raise ValidationError(f"{key} must be an integer")
    elif isinstance(value, float):
        raise ValidationError(f"{key} must be an integer, not a decimal")
    else:
        raise ValidationError(f"{key} must be an integer")

    if minimum is not None and result < minimum:
        raise ValidationError(f"{key} must be >= {minimum}")
    return result


def coerce_money_cents(key: str, value: Any) -> int:
    """
    Parse a decimal amount ("22.75", 22.75, 30) into integer cents.

    Rounds half-up to the cent; rejects negatives, NaN/inf and amounts above
    MAX_PRICE_CENTS.
    """
    if isinstance(value, bool) or value is None:
        raise ValidationError(f"{key} must be a number")
    if isinstance(value, str) and not value.strip():
        raise ValidationError(f"{key} must be a number")
    if not isinstance(value, (int, float, str, Decimal)):
        raise ValidationError(f"{key} must be a number")

    try:
        amount = Decimal(str(value).strip())
    except InvalidOperation:
        raise ValidationError(f"{key} must be a number")
    if not amount.is_finite():
        raise ValidationError(f"{key} must be a finite number")

    cents = int((amount * 100).quantize(Decimal("1"), rounding=ROUND_HALF_UP))
    if cents < 0:
        raise ValidationError(f"{key} must be >= 0")
    if cents > MAX_PRICE_CENTS:
        raise ValidationError(f"{key} cannot exceed {MAX_PRICE_CENTS / 100:,.2f}")
    return cents


def cents_to_amount(cents: int) -> float:
    """Presentation-only conversion; all arithmetic stays in cents."""
    return float(Decimal(cents) / 100)


def coerce_str(key: str, value: Any, spec: FieldSpec) -> str:
    if not isinstance(value, (str, int, float)) or isinstance(value, bool):
        raise ValidationError(f"{key} must be a string")
    val = str(value).strip()
    if not val and not spec.allow_blank:
        raise ValidationError(f"{key} cannot be blank")
    if spec.max_length and len(val) > spec.max_length:
        raise ValidationError(f"{key} exceeds max length {spec.max_length}")
    return val


def _coerce_value(key: str, spec: FieldSpec, value: Any):
    if spec.kind == "int":
        return coerce_int(key, value, minimum=spec.minimum)
    if spec.kind == "money":
        return coerce_money_cents(key, value)
    if spec.kind == "str":
        return coerce_str(key, value, spec)
    raise InternalError(f"Unknown field kind for {key}: {spec.kind}")


def validate_payload(*, payload: Any, policy: ValidationPolicy, partial: bool) -> dict:
    """
    Validates + normalizes incoming JSON against a policy.
    Returns a cleaned patch dict with only writable fields.

    partial=False: create semantics (enforce required_on_create)
    partial=True: patch semantics (validate only provided keys)
    """
    if payload is None:
        payload = {}
    if not isinstance(payload, dict):
        raise ValidationError("Invalid JSON payload")

    if not partial:
        missing = sorted(
            f for f in policy.required_on_create
            if payload.get(f) is None or payload.get(f) == ""
        )
        if missing:
            raise ValidationError(f"Missing required fields: {', '.join(missing)}")

    for k in payload.keys():
        if k in policy.ignored_fields:
            continue
        if k not in policy.fields:
            raise ValidationError(f"Field not allowed: {k}")

    patch: dict = {}
    for k, raw in payload.items():
        if k in policy.ignored_fields:
            continue
        spec = policy.fields[k]

        if raw is None:
            if not spec.nullable:
                raise ValidationError(f"{k} cannot be null")
            patch[k] = None
            continue

        patch[k] = _coerce_value(k, spec, raw)

    return patch
