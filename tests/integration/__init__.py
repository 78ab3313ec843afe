"""Integration tests (real adapters over scripted transports)."""
