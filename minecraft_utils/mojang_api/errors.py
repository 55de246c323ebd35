"""Errors raised by the Mojang API helpers."""


class ApiError(Exception):
    """Base class for failures talking to the Mojang web API."""


class RequestError(ApiError):
    """The API answered with a status other than 200."""

    def __init__(self, status: int, reason: str):
        self.status = status
        self.reason = reason
        super().__init__(f"[{status}] API Request failed: {reason}")


class FetchError(ApiError):
    """The request could not be completed or its body could not be read."""

    def __init__(self, cause: object):
        self.cause = cause
        super().__init__(f"Fetching failed: {cause}")


class UsernameError(ValueError):
    """A username that the API would never return."""

    def __eq__(self, other):
        return type(self) is type(other) and self.args == other.args

    def __hash__(self):
        return hash((type(self), self.args))


class EmptyUsernameError(UsernameError):
    def __init__(self):
        super().__init__("username was empty")


class UsernameTooLongError(UsernameError):
    def __init__(self):
        super().__init__("username was too long")


class InvalidCharacterError(UsernameError):
    def __init__(self, character: str):
        self.character = character
        super().__init__(f"username contained invalid character '{character}'")
