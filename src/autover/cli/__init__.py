"""Command line interface for autover."""
