"""Command-line interface for hired."""
