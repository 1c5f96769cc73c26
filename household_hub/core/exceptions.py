class HouseholdHubException(Exception):
    """Base exception for household hub"""

    pass


class UnauthorizedException(HouseholdHubException):
    """Raised when the caller has no resolvable identity or context"""

    pass


class NotFoundException(HouseholdHubException):
    """Raised when resource not found"""

    pass


class ForbiddenException(HouseholdHubException):
    """Raised when the caller's household has no relationship to the data"""

    pass


class ValidationException(HouseholdHubException):
    """Raised for business logic validation errors"""

    pass


class ConflictException(HouseholdHubException):
    """Raised when an operation collides with one already in progress"""

    pass


class RestoreFailedException(HouseholdHubException):
    """Raised when a restore fails after validation; message is the underlying error"""

    pass
