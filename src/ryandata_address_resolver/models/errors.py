"""Resolution error classes.

Every error raised or returned by the engine derives from
AddressResolutionError, a PydanticCustomError carrying the package name in
its context so callers can tell engine errors apart from their own.
"""

from __future__ import annotations

from typing import Any

from pydantic_core import PydanticCustomError

from ryandata_address_resolver.models.enums import ProviderErrorReason

# Package identifier for error context
PACKAGE_NAME = "ryandata_address_resolver"


class AddressResolutionError(PydanticCustomError):
    """Base error for the address resolution engine.

    Inherits from PydanticCustomError so it can be raised from inside
    Pydantic validators and still be reported with its type and context.
    """

    @classmethod
    def build(cls, error_type: str, message: str, **context: Any) -> AddressResolutionError:
        """Create an error with the package name merged into its context."""
        return cls(error_type, message, {"package": PACKAGE_NAME, **context})

    @property
    def package(self) -> str | None:
        return (self.context or {}).get("package")


class CoordinateValidationError(AddressResolutionError):
    """Input coordinates are outside the valid range or not finite.

    Detected before any provider call is made.
    """

    @classmethod
    def for_pair(cls, lat: Any, lng: Any, reasons: list[str]) -> CoordinateValidationError:
        message = "; ".join(reasons) if reasons else "Invalid coordinate pair"
        return cls(
            "coordinate_validation",
            message,
            {"package": PACKAGE_NAME, "latitude": repr(lat), "longitude": repr(lng)},
        )


class ProviderError(AddressResolutionError):
    """The geocoding provider failed.

    The failure category is stored under ``reason`` in the error context and
    is one of the ProviderErrorReason values.
    """

    @classmethod
    def from_reason(
        cls,
        reason: ProviderErrorReason | str,
        message: str,
        **context: Any,
    ) -> ProviderError:
        """Create a ProviderError for a failure category.

        Args:
            reason: Failure category (network, quota, not_found, malformed_response).
            message: Human-readable description of the failure.
            **context: Extra context such as the operation or HTTP status.

        Returns:
            ProviderError instance.
        """
        reason_value = ProviderErrorReason(reason).value
        return cls(
            "provider_error",
            message,
            {"package": PACKAGE_NAME, "reason": reason_value, **context},
        )

    @property
    def reason(self) -> ProviderErrorReason:
        value = (self.context or {}).get("reason", ProviderErrorReason.NETWORK.value)
        return ProviderErrorReason(value)


class ResolutionFailure(AddressResolutionError):
    """The provider answered but returned nothing usable."""

    @classmethod
    def empty_result(cls, operation: str) -> ResolutionFailure:
        return cls(
            "resolution_failure",
            f"{operation} returned no candidates",
            {"package": PACKAGE_NAME, "operation": operation},
        )
