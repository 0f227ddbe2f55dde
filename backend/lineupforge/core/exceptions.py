class AppError(Exception):
    """Base class for lineup errors handed back to the surrounding service."""
    def __init__(self, message: str, status_code: int = 500, details: dict | None = None):
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        super().__init__(self.message)

class LineupGenerationError(AppError):
    """Raised when roster data cannot be turned into a lineup request."""
    def __init__(self, message: str, details: dict | None = None):
        super().__init__(message, status_code=400, details=details)

class RosterRecordNotFoundError(AppError):
    """Raised when a roster record points at a position or player that is not on the roster."""
    def __init__(self, record_type: str, record_id: str):
        super().__init__(
            f"{record_type} {record_id} is not on the roster",
            status_code=404,
            details={"record_type": record_type, "record_id": record_id},
        )

class ConfigurationError(AppError):
    """Raised when the lineup generation settings are out of range."""
    def __init__(self, message: str, details: dict | None = None):
        super().__init__(message, status_code=500, details=details)
