"""Exceptions for time window parsing and access evaluation."""

class PromptGateError(Exception):
    """Base class for all PromptGate errors."""
    pass

class MalformedWindowError(PromptGateError):
    """Raised when a time window lacks or cannot parse the fields its type requires."""
    def __init__(self, message: str, window_id: str | None = None):
        self.window_id = window_id
        super().__init__(f"{message} (window {window_id})" if window_id is not None else message)

class InvalidInstantError(PromptGateError):
    """Raised when the evaluation instant cannot be resolved."""
    pass

class MembershipLookupError(PromptGateError):
    """Raised by membership providers when group data cannot be loaded."""
    pass
