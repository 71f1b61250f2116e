"""
Custom Exceptions - Application-specific error types
"""


class DayZeroException(Exception):
    """Base exception for all Day Zero errors"""
    pass


class ValidationError(DayZeroException):
    """Raised when input is rejected before any state change"""
    pass


class InvalidHabitDataError(ValidationError):
    """Raised when habit data validation fails"""
    pass


class InvalidLogDataError(ValidationError):
    """Raised when habit log data validation fails"""
    pass


class HabitNotFoundError(DayZeroException):
    """Raised when a habit cannot be found"""
    pass


class EntitlementLimitError(DayZeroException):
    """Raised when the current plan does not allow another habit or goal"""
    pass


class StorageUnavailableError(DayZeroException):
    """Raised when the key-value store cannot be read or written"""
    pass


class RemoteUnavailableError(DayZeroException):
    """Raised when external services (plan source, coach backend) fail"""
    pass
