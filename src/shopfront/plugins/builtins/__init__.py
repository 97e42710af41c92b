"""Built-in plugins shipped with shopfront."""
