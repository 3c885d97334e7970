"""LinkedIn Research Assistant."""
