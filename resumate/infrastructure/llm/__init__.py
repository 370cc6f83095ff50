"""Generation backend adapters."""
