"""Multi-tenant project-management backend: tenant pipeline, quota, and domain events."""

__version__ = "1.0.0"
