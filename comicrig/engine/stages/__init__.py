"""Builder stages. Each module registers one or more stages on import."""
