from __future__ import annotations

from ..core.exceptions import ValidationError


def require_non_empty(value: str, field_name: str) -> str:
    if not value or not value.strip():
        raise ValidationError(f"{field_name} wajib diisi")
    return value.strip()


def require_month_index(value: int) -> int:
    try:
        month_index = int(value)
    except (TypeError, ValueError):
        raise ValidationError("Bulan tidak valid")
    if not 0 <= month_index <= 11:
        raise ValidationError("Bulan tidak valid")
    return month_index
