"""Domain Exceptions"""


class DomainError(Exception):
    """Base class for errors raised by the domain layer"""


class InvalidArgumentError(DomainError, ValueError):
    """Missing or malformed input (None dates, negative nights, blank ids)"""


class InvalidReservationError(DomainError):
    """Business rule violation while creating or changing a reservation"""


class ReservationNotFoundError(DomainError):
    """No reservation stored under the given id"""


class InvalidTransitionError(DomainError):
    """Lifecycle transition not allowed from the current status"""


class CityNotFoundError(DomainError):
    """City is not part of the route graph"""


class NoPathError(DomainError):
    """Two cities lie in disconnected parts of the route graph"""
