"""Domain layer: entities and evaluation services."""
