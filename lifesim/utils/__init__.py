"""Configuration loading and seed/output file handling."""
