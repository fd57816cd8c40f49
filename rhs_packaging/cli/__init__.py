"""Command-line entry points (typer applications)."""
