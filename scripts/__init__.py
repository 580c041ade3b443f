"""Command line helpers for the query gateway."""
