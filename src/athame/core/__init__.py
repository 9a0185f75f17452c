"""Core layer: configuration, domain, contracts and pipeline services."""
