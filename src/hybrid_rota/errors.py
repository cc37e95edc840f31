from __future__ import annotations


class RotaError(Exception):
    """Base class for errors raised while building a rota."""


class ValidationError(RotaError, ValueError):
    """Raised when configuration or input values are out of range."""


class InfeasibleTargetsError(RotaError, ValueError):
    """
    Raised when the per-person at-work / WFH targets cannot fit the calendar.
    """

    def __init__(
        self,
        message: str,
        *,
        target_at_work: int | None = None,
        target_wfh: int | None = None,
        total_slots: int | None = None,
    ) -> None:
        super().__init__(message)
        self.target_at_work = target_at_work
        self.target_wfh = target_wfh
        self.total_slots = total_slots
