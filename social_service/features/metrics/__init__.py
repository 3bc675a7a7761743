"""Metrics feature: Prometheus scrape endpoint."""
