"""Resilient invocation and response normalization."""
