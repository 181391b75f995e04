"""Top-level nextlayer commands."""
