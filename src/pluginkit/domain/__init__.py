"""Domain layer: value objects, pure services and exceptions."""
