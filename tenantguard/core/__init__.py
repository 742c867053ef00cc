"""Application core: configuration, exception mapping, lifespan, tenant context."""
