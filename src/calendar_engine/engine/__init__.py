"""Calendar, series index and registry."""
