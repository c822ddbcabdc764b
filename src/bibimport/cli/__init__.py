"""Command-line interface for bibimport."""
