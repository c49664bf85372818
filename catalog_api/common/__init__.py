"""Helpers shared across API and catalog layers."""
