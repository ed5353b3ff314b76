"""Tunable settings, one module per application."""
