"""Domain-specific route modules."""
