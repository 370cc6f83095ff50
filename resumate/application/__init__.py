"""Application layer: use cases composing domain and infrastructure."""
