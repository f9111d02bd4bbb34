"""Clients for upstream HTTP services and local storage."""
