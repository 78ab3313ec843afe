"""Unit tests (fast, no network)."""
