"""State machines for the storefront view.

Deterministic state machines that define valid transitions for the
product detail selection and for the catalog view lifecycle.
"""

from enum import Enum

from storefront.domain.exceptions import InvalidStateTransitionError


# ============================================================================
# Selection State Machine
# ============================================================================


class SelectionStatus(str, Enum):
    """Product detail selection states.

    State diagram:
        CLOSED ──── open ────► OPEN ◄──┐
          ▲  │                  │  │   │ open another / choose_variant
          │  └─ close (no-op)   │  └───┘
          └────── close ────────┘

    Every state can reach every other, so there is no transition table;
    only shade choice is gated on the status.
    """

    CLOSED = "closed"
    OPEN = "open"

    def accepts_variant_choice(self) -> bool:
        """Check if a shade can be chosen in this state.

        Returns:
            True if a product is open.
        """
        return self == SelectionStatus.OPEN


# ============================================================================
# View Lifecycle State Machine
# ============================================================================


class ViewStatus(str, Enum):
    """Catalog view lifecycle states.

    State diagram:
        LOADING ──── catalog attached ────► READY
          │
          │ fetch failed / invalid document
          ▼
        UNAVAILABLE
    """

    LOADING = "loading"
    READY = "ready"
    UNAVAILABLE = "unavailable"

    def can_transition_to(self, target: "ViewStatus") -> bool:
        """Check if transition to target state is valid.

        Args:
            target: Target state to transition to.

        Returns:
            True if transition is valid.
        """
        return target in _VIEW_TRANSITIONS.get(self, set())

    def allowed_transitions(self) -> list["ViewStatus"]:
        """Get list of valid target states.

        Returns:
            List of states that can be transitioned to.
        """
        return list(_VIEW_TRANSITIONS.get(self, set()))

    def is_terminal(self) -> bool:
        """Check if this is a terminal (final) state.

        Returns:
            True if no further transitions are possible.
        """
        return len(_VIEW_TRANSITIONS.get(self, set())) == 0


_VIEW_TRANSITIONS: dict[ViewStatus, set[ViewStatus]] = {
    ViewStatus.LOADING: {ViewStatus.READY, ViewStatus.UNAVAILABLE},
    ViewStatus.READY: set(),  # Terminal state
    ViewStatus.UNAVAILABLE: set(),  # Terminal state; reload means a new process
}


# ============================================================================
# State Machine Helpers
# ============================================================================


def validate_view_transition(
    current_status: ViewStatus,
    target_status: ViewStatus,
) -> None:
    """Validate and raise if view lifecycle transition is invalid.

    Args:
        current_status: Current view status.
        target_status: Target view status.

    Raises:
        InvalidStateTransitionError: If transition is not valid.
    """
    if not current_status.can_transition_to(target_status):
        raise InvalidStateTransitionError(
            entity_type="View",
            current_state=current_status.value,
            target_state=target_status.value,
            allowed_transitions=[s.value for s in current_status.allowed_transitions()],
        )
