"""External service clients and generators."""
