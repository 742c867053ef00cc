"""Domain layer: exceptions, enums and the pure authorization decision."""
