"""Command line interface for cofi."""
