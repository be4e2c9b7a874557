"""Number helpers for rendering plan values in logs."""

from __future__ import annotations

from datetime import datetime, timezone
from decimal import Decimal
from typing import Any, Union


def to_int(value: Union[int, str], key: str = "value") -> int:
    """Parse an integer plan value given as an int or a numeric string such as '10_000'."""
    if isinstance(value, bool):
        raise ValueError(f"'{key}' must be an integer, got bool")
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value.strip().replace("_", ""))
        except ValueError as exc:
            raise ValueError(f"'{key}' must be an integer, got '{value}'") from exc
    raise ValueError(f"'{key}' must be an integer, got {type(value).__name__}")


def token_to_string(amount: int, token: Any) -> str:
    """Render a raw token amount using the token's decimals and symbol."""
    decimals = getattr(token, "decimals", 18)
    symbol = getattr(token, "symbol", "")
    value = Decimal(amount) / (Decimal(10) ** decimals)
    rendered = format(value.normalize(), "f") if value else "0"
    return f"{rendered} {symbol}".strip()


def timestamp_to_string(seconds: int) -> str:
    return datetime.fromtimestamp(seconds, tz=timezone.utc).strftime("%Y-%m-%d %H:%M:%S UTC")
