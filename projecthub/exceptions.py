"""
Error taxonomy for the project service

Every error carries its HTTP status and renders to the uniform JSON body
(``{"error": message}`` or a field -> message map for validation failures).
"""

from typing import Dict, Optional


class ProjectHubError(Exception):
    status_code: int = 500
    message: str = "An unexpected error occurred"

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.message
        super().__init__(self.message)

    def to_payload(self) -> Dict[str, str]:
        return {"error": self.message}


class ValidationError(ProjectHubError):
    status_code = 400
    message = "Validation failed"

    def __init__(self, errors: Dict[str, str]):
        self.errors = dict(errors)
        super().__init__("; ".join(f"{field}: {msg}" for field, msg in self.errors.items()))

    def to_payload(self) -> Dict[str, str]:
        return dict(self.errors)


class AuthenticationRequired(ProjectHubError):
    status_code = 401
    message = "Authentication required"


class InvalidCredentials(ProjectHubError):
    status_code = 401
    message = "Invalid email or password"


class Forbidden(ProjectHubError):
    status_code = 403
    message = "You are not authorized to access this resource"


class NotFound(ProjectHubError):
    status_code = 404
    message = "Resource not found"


class AlreadyExists(ProjectHubError):
    status_code = 409
    message = "Resource already exists"
