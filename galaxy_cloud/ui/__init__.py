"""Interactive parameter controls."""
