from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Optional


def _env_optional(name: str) -> Optional[str]:
    value = os.getenv(name)
    return value or None


@dataclass
class GoogleMapsConfig:
    """Configuration for the Google Maps web service adapter."""

    api_key: Optional[str] = field(
        default_factory=lambda: _env_optional("RYANDATA_GOOGLE_MAPS_API_KEY")
    )
    base_url: str = field(
        default_factory=lambda: os.getenv(
            "RYANDATA_GOOGLE_MAPS_BASE_URL",
            "https://maps.googleapis.com/maps/api",
        )
    )
    timeout: float = field(
        default_factory=lambda: float(os.getenv("RYANDATA_GOOGLE_MAPS_TIMEOUT", "10"))
    )
    language: Optional[str] = field(
        default_factory=lambda: _env_optional("RYANDATA_GOOGLE_MAPS_LANGUAGE")
    )
    # Autocomplete restriction used by the address forms
    prediction_types: str = "geocode"
