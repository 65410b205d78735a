"""Errors raised when registering or looking up experiments."""


class InvalidExperimentError(ValueError):
    """An experiment definition was rejected at registration time."""

    def __init__(self, key: str, message: str) -> None:
        super().__init__(f"cannot register experiment with key: `{key}`: {message}")
        self.key = key
        self.message = message


class ExperimentNotFoundError(LookupError):
    """An experiment was requested that has not been registered."""

    def __init__(self, key: str, message: str) -> None:
        super().__init__(f"cannot retrieve experiment with key: `{key}`: {message}")
        self.key = key
        self.message = message

    def __str__(self) -> str:
        return self.args[0]