"""Application-level helpers (console output)."""
