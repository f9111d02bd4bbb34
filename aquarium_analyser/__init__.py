"""Aquarium Analyser backend."""
