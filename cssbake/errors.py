"""Exception hierarchy for input-boundary failures."""


class CssbakeError(Exception):
    """Base for all cssbake errors."""


class OptionsError(CssbakeError):
    """Invalid or unknown transform option."""


class EstreeError(CssbakeError):
    """Malformed ESTree JSON input."""

    def __init__(self, message: str, path: str = "") -> None:
        self.message = message
        self.path = path
        if path:
            super().__init__(f"{path}: {message}")
        else:
            super().__init__(message)


class EmitError(CssbakeError):
    """Node that cannot be printed as JavaScript."""
