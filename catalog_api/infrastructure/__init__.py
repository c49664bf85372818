"""Infrastructure layer: configuration, logging and database plumbing."""
