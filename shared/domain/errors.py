"""
Domain Errors

Every failure raised by the booking core carries a ``kind`` so the outer
layer can map it to a response without inspecting messages:

- NotFound: room, booking or user absent
- ValidationFailed: malformed input or a broken business rule on input
- Forbidden: the caller's capabilities do not cover the operation
- Conflict: overlap, illegal transition, blocked delete, duplicates
- DependencyFailure: an external collaborator failed (never surfaced)
"""


class DomainError(Exception):
    """Base class for all domain errors"""

    kind = "domain_error"
    retryable = False
    default_message = "Domain error"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class NotFound(DomainError):
    kind = "not_found"
    default_message = "Resource not found"


class ValidationFailed(DomainError):
    kind = "validation_failed"
    default_message = "Invalid input"


class Forbidden(DomainError):
    kind = "forbidden"
    default_message = "You are not allowed to perform this action"


class Conflict(DomainError):
    kind = "conflict"
    default_message = "Operation conflicts with the current state"


class DependencyFailure(DomainError):
    kind = "dependency_failure"
    default_message = "External collaborator failed"


# ===== Not found =====

class RoomNotFound(NotFound):
    default_message = "Room not found"


class BookingNotFound(NotFound):
    default_message = "Booking not found"


class UserNotFound(NotFound):
    default_message = "User not found"


# ===== Validation =====

class CapacityExceeded(ValidationFailed):
    def __init__(self, capacity: int):
        self.capacity = capacity
        super().__init__(f"Room capacity is {capacity} guests")


class PastCheckIn(ValidationFailed):
    default_message = "Check-in date cannot be in the past"


class InvalidDateOrder(ValidationFailed):
    default_message = "Check-out date must be after check-in date"


# ===== Conflicts =====

class DateConflict(Conflict):
    default_message = "Room is not available for selected dates"


class IllegalStatusTransition(Conflict):
    def __init__(self, current: str, target: str):
        self.current = current
        self.target = target
        super().__init__(f"Cannot change booking status from {current} to {target}")


class BookingTerminal(Conflict):
    def __init__(self, status: str, action: str = "update"):
        self.status = status
        super().__init__(f"Cannot {action} {status} booking")


class BookingAlreadyCancelled(Conflict):
    default_message = "Booking is already cancelled"


class RoomHasActiveBookings(Conflict):
    default_message = "Cannot delete room with active bookings"


class DuplicateRoomNumber(Conflict):
    def __init__(self, room_number: str):
        self.room_number = room_number
        super().__init__(f"Room number {room_number} already exists")


class RoomBusy(Conflict):
    """Another booking write holds the room; the caller may retry."""

    retryable = True
    default_message = "Room is being booked by another request, please retry"


# ===== Dependencies =====

class NotificationDeliveryError(DependencyFailure):
    default_message = "Notification could not be delivered"
