"""Shipped YAML configuration (config.yaml, includes and factory defaults)."""
