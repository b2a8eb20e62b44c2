class AppError(Exception):
    """Base class for all application exceptions."""
    def __init__(self, message: str, status_code: int = 500, details: dict = None):
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        super().__init__(self.message)

class ScheduleValidationError(AppError):
    """Raised when a screening breaks one or more scheduling rules."""
    def __init__(self, errors: list, message: str = "Screening violates scheduling rules"):
        self.errors = list(errors)
        super().__init__(
            message,
            status_code=422,
            details={"errors": [{"message": item.message, "field": item.field} for item in self.errors]},
        )

class ProtectedDeletionError(AppError):
    """Raised when a deletion would break the premiere minimum for a day."""
    def __init__(self, message: str, details: dict = None):
        super().__init__(message, status_code=409, details=details)

class ResourceNotFoundError(AppError):
    """Raised when a requested resource is not found."""
    def __init__(self, resource_type: str, resource_id: str):
        super().__init__(f"{resource_type} with id {resource_id} not found", status_code=404)

class ConfigurationError(AppError):
    """Raised when system configuration is invalid."""
    def __init__(self, message: str):
        super().__init__(message, status_code=500)
