"""Output surfaces for command results."""

from .text_view import TextView

__all__ = ["TextView"]
