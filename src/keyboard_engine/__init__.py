"""UI-agnostic text model for virtual keyboard input sessions."""

__all__ = [
    "runtime",
    "text",
]

__version__ = "0.1.0"
