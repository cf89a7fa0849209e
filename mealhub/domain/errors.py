"""Error taxonomy shared by the domain, infra and API layers.

Every error carries the HTTP status the API maps it to; the message is what
the client sees in ``{"success": false, "error": ...}``.
"""


class MealHubError(Exception):
    status_code = 500

    def __init__(self, message: str = "Internal error"):
        super().__init__(message)
        self.message = message


class AuthenticationError(MealHubError):
    status_code = 401

    def __init__(self, message: str = "Not authenticated"):
        super().__init__(message)


class AuthorizationError(MealHubError):
    status_code = 403

    def __init__(self, message: str = "Unauthorized"):
        super().__init__(message)


class ValidationError(MealHubError):
    status_code = 400


class NotFoundError(MealHubError):
    status_code = 404


class StoreError(MealHubError):
    """The document store could not be read or written."""
    status_code = 500


class AIGenerationError(MealHubError):
    status_code = 502


__all__ = [
    'MealHubError', 'AuthenticationError', 'AuthorizationError', 'ValidationError',
    'NotFoundError', 'StoreError', 'AIGenerationError',
]
