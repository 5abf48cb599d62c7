"""Command-line interface for Tallysheet."""
