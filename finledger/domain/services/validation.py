"""Payload validation for ledger writes.

Each validator returns the normalized fields of an entity or raises
InvalidInput naming the offending field. Nothing is written before a
payload validates.
"""

from collections.abc import Mapping
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Any

from finledger.domain.constants import MAX_CARD_DAY, MAX_MONEY, MIN_CARD_DAY
from finledger.domain.errors import InvalidInput
from finledger.domain.models import (
    AccountType,
    CardBrand,
    EntryKind,
    PaymentMethod,
)

_MISSING = object()


def validate_account_payload(payload: Mapping[str, Any]) -> dict[str, Any]:
    """Validate the fields of a new account."""
    return {
        "name": _require_text(payload, "name"),
        "bank": _require_text(payload, "bank"),
        "account_type": _require_enum(payload, "account_type", AccountType),
        "initial_balance": _require_money(
            payload, "initial_balance", allow_negative=True
        ),
    }


def validate_category_payload(payload: Mapping[str, Any]) -> dict[str, Any]:
    """Validate the fields of a new category."""
    fields = {
        "name": _require_text(payload, "name"),
        "kind": _require_enum(payload, "kind", EntryKind),
    }
    color = _optional_text(payload, "color")
    if color is not None:
        fields["color"] = color
    return fields


def validate_card_payload(payload: Mapping[str, Any]) -> dict[str, Any]:
    """Validate the fields of a new card.

    Close and due days only need to lie in 1..31; they are not checked
    against the length of any particular month.
    """
    return {
        "name": _require_text(payload, "name"),
        "brand": _require_enum(payload, "brand", CardBrand),
        "credit_limit": _require_money(payload, "credit_limit", allow_zero=True),
        "close_day": _require_int(payload, "close_day", MIN_CARD_DAY, MAX_CARD_DAY),
        "due_day": _require_int(payload, "due_day", MIN_CARD_DAY, MAX_CARD_DAY),
    }


def validate_transaction_payload(
    payload: Mapping[str, Any],
) -> dict[str, Any]:
    """Validate the fields of a new transaction.

    The returned mapping also carries card_guid, None unless the payment
    method is credit_card and a card was named.
    """
    payment_method = _require_enum(payload, "payment_method", PaymentMethod)
    is_parceled = _optional_bool(payload, "is_parceled", False)
    total_parcels = _optional_int(payload, "total_parcels", 1)
    parcel_number = _optional_int(payload, "parcel_number", 1)
    if total_parcels < 1:
        raise InvalidInput("total_parcels", "must be at least 1")
    if parcel_number < 1:
        raise InvalidInput("parcel_number", "must be at least 1")
    if parcel_number > total_parcels:
        raise InvalidInput(
            "parcel_number",
            "must not exceed total_parcels",
        )
    if not is_parceled and (total_parcels != 1 or parcel_number != 1):
        raise InvalidInput(
            "is_parceled",
            "installment numbers require is_parceled",
        )

    card_guid = _optional_text(payload, "card_guid")
    if card_guid is not None and payment_method is not PaymentMethod.CREDIT_CARD:
        raise InvalidInput(
            "card_guid",
            "only credit_card transactions can be linked to a card",
        )

    return {
        "account_guid": _require_text(payload, "account_guid"),
        "category_guid": _require_text(payload, "category_guid"),
        "kind": _require_enum(payload, "kind", EntryKind),
        "value": _require_money(payload, "value"),
        "date": _require_date(payload, "date"),
        "description": _require_text(payload, "description"),
        "payment_method": payment_method,
        "is_fixed": _optional_bool(payload, "is_fixed", False),
        "is_parceled": is_parceled,
        "total_parcels": total_parcels,
        "parcel_number": parcel_number,
        "card_guid": card_guid,
    }


def validate_transfer_payload(payload: Mapping[str, Any]) -> dict[str, Any]:
    """Validate the fields of a new transfer."""
    from_account_guid = _require_text(payload, "from_account_guid")
    to_account_guid = _require_text(payload, "to_account_guid")
    if from_account_guid == to_account_guid:
        raise InvalidInput(
            "to_account_guid",
            "must differ from from_account_guid",
        )
    return {
        "from_account_guid": from_account_guid,
        "to_account_guid": to_account_guid,
        "value": _require_money(payload, "value"),
        "date": _require_date(payload, "date"),
        "description": _optional_text(payload, "description"),
    }


def validate_simulation_payload(
    payload: Mapping[str, Any],
    partial: bool = False,
) -> dict[str, Any]:
    """Validate simulation fields.

    Args:
        payload: Raw simulation fields.
        partial: When True only the present fields are validated and
            returned, as for an update.

    Returns:
        dict[str, Any]: Normalized fields.
    """
    validators = {
        "name": lambda: _require_text(payload, "name"),
        "kind": lambda: _require_enum(payload, "kind", EntryKind),
        "value": lambda: _require_money(payload, "value"),
        "start_date": lambda: _require_date(payload, "start_date"),
        "end_date": lambda: _optional_date(payload, "end_date"),
        "is_active": (
            (lambda: _require_bool(payload, "is_active"))
            if partial
            else (lambda: _optional_bool(payload, "is_active", True))
        ),
    }
    fields = {
        name: validate()
        for name, validate in validators.items()
        if not partial or name in payload
    }
    if not fields:
        raise InvalidInput("payload", "no simulation field to update")
    return fields


def validate_simulation_window(start_date: date, end_date: date | None) -> None:
    """Reject an end date earlier than the start date."""
    if end_date is not None and end_date < start_date:
        raise InvalidInput("end_date", "must not be before start_date")


def _get(payload: Mapping[str, Any], field: str):
    value = payload.get(field, _MISSING)
    if value is _MISSING or value is None:
        raise InvalidInput(field, "is required")
    return value


def _require_text(payload: Mapping[str, Any], field: str) -> str:
    value = _get(payload, field)
    if not isinstance(value, str) or not value.strip():
        raise InvalidInput(field, "must be a non-empty string")
    return value.strip()


def _optional_text(payload: Mapping[str, Any], field: str) -> str | None:
    value = payload.get(field)
    if value is None:
        return None
    if not isinstance(value, str):
        raise InvalidInput(field, "must be a string")
    return value.strip() or None


def _require_enum(payload: Mapping[str, Any], field: str, enum_cls: type[Enum]):
    value = _get(payload, field)
    if isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(value)
    except ValueError:
        allowed = ", ".join(member.value for member in enum_cls)
        raise InvalidInput(field, f"must be one of: {allowed}") from None


def _require_money(
    payload: Mapping[str, Any],
    field: str,
    allow_zero: bool = False,
    allow_negative: bool = False,
) -> Decimal:
    value = _get(payload, field)
    if isinstance(value, (bool, float)):
        raise InvalidInput(field, "must be a decimal string, not a float")
    if isinstance(value, Decimal):
        amount = value
    elif isinstance(value, (int, str)):
        try:
            amount = Decimal(str(value).strip())
        except InvalidOperation:
            raise InvalidInput(field, "must be a decimal number") from None
    else:
        raise InvalidInput(field, "must be a decimal number")
    if not amount.is_finite():
        raise InvalidInput(field, "must be a finite number")
    if amount.as_tuple().exponent < -2:
        raise InvalidInput(field, "must have at most two decimal places")
    if abs(amount) > MAX_MONEY:
        raise InvalidInput(field, f"must not exceed {MAX_MONEY}")
    if amount < 0 and not allow_negative:
        raise InvalidInput(field, "must not be negative")
    if amount == 0 and not (allow_zero or allow_negative):
        raise InvalidInput(field, "must be positive")
    return amount


def _require_date(payload: Mapping[str, Any], field: str) -> date:
    return _to_date(field, _get(payload, field))


def _optional_date(payload: Mapping[str, Any], field: str) -> date | None:
    value = payload.get(field)
    if value is None or value == "":
        return None
    return _to_date(field, value)


def _to_date(field: str, value) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        try:
            return date.fromisoformat(value.strip())
        except ValueError:
            pass
    raise InvalidInput(field, "must be a date in YYYY-MM-DD format")


def _require_int(
    payload: Mapping[str, Any],
    field: str,
    minimum: int,
    maximum: int,
) -> int:
    value = _get(payload, field)
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidInput(field, "must be an integer")
    if not minimum <= value <= maximum:
        raise InvalidInput(field, f"must be between {minimum} and {maximum}")
    return value


def _optional_int(payload: Mapping[str, Any], field: str, default: int) -> int:
    value = payload.get(field)
    if value is None:
        return default
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidInput(field, "must be an integer")
    return value


def _require_bool(payload: Mapping[str, Any], field: str) -> bool:
    value = _get(payload, field)
    if not isinstance(value, bool):
        raise InvalidInput(field, "must be a boolean")
    return value


def _optional_bool(payload: Mapping[str, Any], field: str, default: bool) -> bool:
    value = payload.get(field)
    if value is None:
        return default
    if not isinstance(value, bool):
        raise InvalidInput(field, "must be a boolean")
    return value


__all__ = [
    "validate_account_payload",
    "validate_category_payload",
    "validate_card_payload",
    "validate_transaction_payload",
    "validate_transfer_payload",
    "validate_simulation_payload",
    "validate_simulation_window",
]
