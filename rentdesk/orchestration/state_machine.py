"""Transition tables for rental requests and rental agreements."""

from __future__ import annotations

from enum import Enum

from rentdesk.core.exceptions import ConflictError
from rentdesk.models.enums import AgreementState, RentalRequestStatus


class InvalidTransitionError(ConflictError):
    """Raised when a disallowed state transition is attempted."""


class StateMachine:
    """Closed transition table; states with no outgoing edges are terminal."""

    def __init__(self, name: str, transitions: dict[Enum, set[Enum]]) -> None:
        self.name = name
        self._transitions = transitions

    def can_transition(self, current: Enum, target: Enum) -> bool:
        return target in self._transitions.get(current, set())

    def is_terminal(self, state: Enum) -> bool:
        return not self._transitions.get(state)

    def assert_transition(self, current: Enum, target: Enum) -> None:
        if not self.can_transition(current=current, target=target):
            raise InvalidTransitionError(
                f"{self.name} transition not allowed: {current.value} -> {target.value}"
            )


REQUEST_LIFECYCLE = StateMachine(
    "rental request",
    {
        RentalRequestStatus.PENDING: {RentalRequestStatus.APPROVED, RentalRequestStatus.REJECTED},
        RentalRequestStatus.APPROVED: set(),
        RentalRequestStatus.REJECTED: set(),
    },
)

AGREEMENT_LIFECYCLE = StateMachine(
    "rental agreement",
    {
        AgreementState.OPEN: {AgreementState.CLOSED},
        AgreementState.CLOSED: set(),
    },
)
