"""
Registration lifecycle for a (user, event) pair.

    UNREGISTERED --register--> REGISTERED --check_in--> CHECKED_IN
    REGISTERED --unregister--> UNREGISTERED

CHECKED_IN is terminal: a check-in cannot be undone and a checked-in
registration cannot be cancelled.
"""
from typing import Optional
from campushub.exceptions import (
    AlreadyCheckedInError,
    AlreadyRegisteredError,
    InvalidTransitionError,
)
from campushub.models import EventRegistration
from campushub.models.enums import RegistrationState

ALLOWED_TRANSITIONS = {
    RegistrationState.UNREGISTERED: {RegistrationState.REGISTERED},
    RegistrationState.REGISTERED: {
        RegistrationState.UNREGISTERED,
        RegistrationState.CHECKED_IN,
    },
    RegistrationState.CHECKED_IN: set(),
}


def state_of(registration: Optional[EventRegistration]) -> RegistrationState:
    if registration is None:
        return RegistrationState.UNREGISTERED
    return registration.state


def can_transition(current: RegistrationState, target: RegistrationState) -> bool:
    return target in ALLOWED_TRANSITIONS[current]


def ensure_transition(registration: Optional[EventRegistration], target: RegistrationState):
    """Raise if moving `registration` to `target` is not a legal transition."""
    current = state_of(registration)
    if can_transition(current, target):
        return current

    if target == RegistrationState.REGISTERED:
        raise AlreadyRegisteredError(registration)
    if target == RegistrationState.CHECKED_IN and current == RegistrationState.CHECKED_IN:
        raise AlreadyCheckedInError(registration)
    if target == RegistrationState.UNREGISTERED and current == RegistrationState.CHECKED_IN:
        raise InvalidTransitionError(
            "Cannot cancel a registration that has already been checked in"
        )
    raise InvalidTransitionError(
        f"Cannot move registration from {current.value} to {target.value}"
    )
