"""Output helpers: DOT graphs and formatting."""
