"""Application layer: settings and logging."""
