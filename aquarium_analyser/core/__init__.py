"""Core infrastructure: logging and exceptions."""
