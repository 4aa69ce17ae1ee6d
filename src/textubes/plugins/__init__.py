"""Node kind plugins: registry, discovery, and the built-in kinds."""
