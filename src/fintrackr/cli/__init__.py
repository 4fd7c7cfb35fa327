"""Command line interface for fintrackr."""
