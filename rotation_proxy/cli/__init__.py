"""Command-line interface for the rotation proxy."""
