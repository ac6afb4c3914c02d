"""Request guards."""

from promptgate.infrastructure.api.middleware.time_window_guard import (
    create_time_window_validator,
)

__all__ = ["create_time_window_validator"]
