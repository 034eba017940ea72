"""Command line interface for inspecting transform tree files."""
