"""Command-line interface for dbhandle."""
