"""Configuration, logging and network utilities."""
