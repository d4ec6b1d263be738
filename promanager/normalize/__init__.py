"""Normalization exports."""

from .league import normalize_league, remote_settings_of
from .offers import OfferResult, normalize_offer_result
from .policy import coerce_policy_patch

__all__ = [
    "normalize_league",
    "remote_settings_of",
    "OfferResult",
    "normalize_offer_result",
    "coerce_policy_patch",
]
