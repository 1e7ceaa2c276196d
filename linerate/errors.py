class LineRateError(Exception):
    """Base class for errors raised by linerate."""


class InputValidationError(LineRateError):
    """The input path given on the command line cannot be used."""

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(reason)
        self.path = path
        self.reason = reason
