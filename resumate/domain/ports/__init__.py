"""Ports - interfaces for external collaborators."""
