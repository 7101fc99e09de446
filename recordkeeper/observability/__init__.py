"""Observability: structured logging and Prometheus metrics.

Logging goes through structlog, metrics through prometheus_client.
"""
