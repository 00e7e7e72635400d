"""Small pure helpers (time, identifiers)."""
