"""Runtime exceptions."""


class TemplError(Exception):
    """Base class for errors raised by the pytempl runtime."""


class InvalidComponentError(TemplError, TypeError):
    """Raised when a value that cannot render is used as a component."""

    def __init__(self, value: object, where: str = ""):
        self.value = value
        self.where = where
        message = f"{type(value).__name__} object is not renderable"
        if where:
            message = f"{where}: {message}"
        super().__init__(message)
