class LawVaultError(Exception):
    """Base class for errors that map to a client-facing HTTP response."""

    status_code = 500
    default_message = "Something went wrong"

    def __init__(self, message: str = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(LawVaultError):
    status_code = 400
    default_message = "Please provide all required fields"


class AuthError(LawVaultError):
    status_code = 401
    default_message = "Invalid email or password"


class NotFoundError(LawVaultError):
    status_code = 404
    default_message = "Not found"


class ConflictError(LawVaultError):
    status_code = 409
    default_message = "Already exists"
