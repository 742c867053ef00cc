"""tenantguard: role-based authorization and tenant isolation for a multi-tenant operations platform."""

__version__ = "1.0.0"
