"""Result class for resolution calls.

A ResolutionResult is what every orchestrator flow returns: the resolved
address (if any), the error that stopped it (if any), and a process log of
the fallbacks and corrections applied along the way.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from abstract_validation_base import ProcessEntry, ProcessLog

from ryandata_address_resolver.models.enums import ResolutionFlow, ResolutionStatus

if TYPE_CHECKING:
    from ryandata_address_resolver.models.address import ResolvedAddress


@dataclass
class ResolutionResult:
    """Outcome of one resolution call.

    ``address`` is set for RESOLVED and NOT_FOUND (an empty record in the
    latter case) and is None for every other status.
    """

    flow: ResolutionFlow
    status: ResolutionStatus
    address: ResolvedAddress | None = None
    error: Exception | None = None
    call_site: str = "default"
    sequence: int = 0
    process_log: ProcessLog = field(default_factory=ProcessLog)

    @property
    def is_resolved(self) -> bool:
        return self.status is ResolutionStatus.RESOLVED and self.address is not None

    @property
    def is_stale(self) -> bool:
        return self.status is ResolutionStatus.STALE

    @property
    def is_failure(self) -> bool:
        """True for any outcome the caller should render as a failure."""
        return self.status in (
            ResolutionStatus.NOT_FOUND,
            ResolutionStatus.INVALID_INPUT,
            ResolutionStatus.PROVIDER_ERROR,
        )

    def to_dict(self) -> dict[str, Any]:
        """Flatten into a dict of status plus address fields."""
        data: dict[str, Any] = {
            "flow": self.flow.value,
            "status": self.status.value,
            "call_site": self.call_site,
            "sequence": self.sequence,
            "error": str(self.error) if self.error is not None else None,
        }
        if self.address is not None:
            data.update(self.address.to_dict())
        return data

    def add_process_error(
        self,
        field: str,
        message: str,
        value: Any = None,
        context: dict[str, Any] | None = None,
    ) -> None:
        """Track an error that did not stop the resolution.

        Args:
            field: Name of the field concerned.
            message: Error message describing the issue.
            value: The problematic value (optional).
            context: Additional context dict (optional).
        """
        entry = ProcessEntry(
            entry_type="error",
            field=field,
            message=message,
            original_value=str(value) if value is not None else None,
            context=context or {},
        )
        self.process_log.errors.append(entry)

    def add_process_cleaning(
        self,
        field: str,
        original_value: Any,
        new_value: Any,
        reason: str,
        operation_type: str = "fallback",
    ) -> None:
        """Track a substitution or correction applied to a field.

        Args:
            field: Name of the field that was changed.
            original_value: The value before the change.
            new_value: The value after the change.
            reason: Why the change was made.
            operation_type: Category of operation (fallback, backfill, cleaning).
        """
        entry = ProcessEntry(
            entry_type="cleaning",
            field=field,
            message=reason,
            original_value=str(original_value) if original_value is not None else None,
            new_value=str(new_value) if new_value is not None else None,
            context={"operation_type": operation_type},
        )
        self.process_log.cleaning.append(entry)

    def audit_log(self) -> list[dict[str, Any]]:
        """Process entries as dicts sorted by timestamp."""
        entries = [entry.model_dump() for entry in self.process_log.cleaning]
        entries.extend(entry.model_dump() for entry in self.process_log.errors)
        return sorted(entries, key=lambda x: str(x.get("timestamp", "")))
