"""Core configuration, errors and remote gateway."""
