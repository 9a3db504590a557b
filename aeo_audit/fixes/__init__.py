"""Recommendation knowledge base, one registry per category."""
