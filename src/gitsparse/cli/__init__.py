"""Command-line interface for gitsparse."""
