"""Command-line interface for depster."""
