"""Domain layer: lock records, value objects and errors."""
