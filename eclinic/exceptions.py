class ClinicError(Exception):
    """Base class for failures that are reported to the caller as {success: false, message}."""

    status_code = 500
    message = "Internal server error"

    def __init__(self, message: str = None):
        if message is not None:
            self.message = message
        super().__init__(self.message)


class InvalidCredentials(ClinicError):
    status_code = 401
    message = "Invalid username or password"


class NotFound(ClinicError):
    status_code = 404
    message = "Username not found"


class WrongAnswer(ClinicError):
    status_code = 401
    message = "Incorrect recovery answer"


class UsernameTaken(ClinicError):
    status_code = 400
    message = "Username already taken"


class InternalError(ClinicError):
    status_code = 500
    message = "Internal server error"


class LocationUnavailable(Exception):
    """Coordinate acquisition was denied, timed out, or is unsupported."""

    def __init__(self, reason: str = "Permission denied or location unavailable. Please select manually."):
        self.reason = reason
        super().__init__(reason)
