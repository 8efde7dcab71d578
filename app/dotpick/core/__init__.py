"""Core infrastructure: paths, configuration, probing and theming."""
