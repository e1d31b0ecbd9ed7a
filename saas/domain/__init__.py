"""Domain layer: enums and business exceptions. No infrastructure imports."""
