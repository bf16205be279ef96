"""Text command parsing and dispatch."""
