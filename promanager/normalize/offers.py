"""Normalization of remote offer (clause) responses."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional

from ..aliases import OFFER_ALIASES, resolve
from ..biwenger_api.client import RemoteResponse


@dataclass(frozen=True)
class OfferResult:
    status: int
    message: str
    user_message: str
    code: Optional[int]

    @property
    def accepted(self) -> bool:
        # Status and code are checked independently: a non-2xx/3xx status with
        # code 0 still counts as accepted.
        return 200 <= self.status < 400 or self.code == 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "status": self.status,
            "message": self.message,
            "userMessage": self.user_message,
            "code": self.code,
        }


def _int_or_none(value: Any) -> Optional[int]:
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def normalize_offer_result(response: RemoteResponse) -> OfferResult:
    payload: Mapping[str, Any] = (
        response.payload if isinstance(response.payload, Mapping) else {}
    )
    status = _int_or_none(resolve(payload, "status", OFFER_ALIASES))
    if status is None:
        status = response.status_code
    return OfferResult(
        status=status,
        message=str(resolve(payload, "message", OFFER_ALIASES, "No message")),
        user_message=str(
            resolve(payload, "user_message", OFFER_ALIASES, "No user message")
        ),
        code=_int_or_none(resolve(payload, "code", OFFER_ALIASES)),
    )
