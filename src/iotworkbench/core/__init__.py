"""Registry, resolver, lifecycle driver and project descriptor."""
