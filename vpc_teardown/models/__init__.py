"""Teardown data models."""
