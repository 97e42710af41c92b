"""Configuration — settings discovery, hierarchical store, and logging."""
