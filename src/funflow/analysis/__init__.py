"""Analyses of FUN programs."""
