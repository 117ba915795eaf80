"""Core infrastructure: paths, configuration, theme, and size formatting."""
