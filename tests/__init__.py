"""Test package to ensure deterministic import paths during collection."""
