"""Core infrastructure: graph store, snapshots, configuration, logging."""
