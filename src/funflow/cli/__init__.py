"""Command line interface for funflow."""
