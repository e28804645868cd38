from __future__ import annotations

from enum import Enum

from crypto_gateway.errors import InvalidRequestError


class Scale(str, Enum):
    """Time bucket widths a chart series can be requested in."""

    M5 = "5m"
    M30 = "30m"
    H1 = "1h"
    H4 = "4h"
    D1 = "1d"
    W1 = "1w"


SUPPORTED_SCALES = tuple(scale.value for scale in Scale)


def resolve_scale(raw: str | None) -> Scale | None:
    """Resolve a raw ``scale`` query value.

    An empty or missing value returns None; the primary store then applies
    its own configured default. Any other value must be one of
    ``SUPPORTED_SCALES`` exactly as written.
    """
    if not raw:
        return None
    try:
        return Scale(raw)
    except ValueError as exc:
        raise InvalidRequestError(
            f"Unsupported scale '{raw}'. Supported values: {', '.join(SUPPORTED_SCALES)}"
        ) from exc
