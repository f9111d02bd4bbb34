"""Algae article scraping and SEO pipeline."""
