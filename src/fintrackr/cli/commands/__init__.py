"""CLI commands for fintrackr."""
