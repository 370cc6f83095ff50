"""Infrastructure layer: adapters for backends, storage and configuration."""
