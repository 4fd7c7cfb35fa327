"""Client-side presentation layer for fintrackr."""
