"""HTTP JSON API for fintrackr."""
