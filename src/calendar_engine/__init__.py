"""Personal calendar engine driven by a text command protocol."""

__version__ = "0.1.0"
