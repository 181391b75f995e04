"""Core resolution, configuration and path handling for nextlayer."""
