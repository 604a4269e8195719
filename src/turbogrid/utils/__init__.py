"""Small helpers shared across TurboGrid."""
