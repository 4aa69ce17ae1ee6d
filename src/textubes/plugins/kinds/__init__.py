"""Built-in node kinds (discovered by folder scan)."""
