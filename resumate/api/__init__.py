"""HTTP API: container, dependencies and routes."""
