"""Command line interface for phpexec."""
