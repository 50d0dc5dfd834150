"""Built-in export templates."""
