"""Core services: auth, permissions, persistence, errors and logging."""
