"""Infrastructure layer: configuration, factories and API plumbing."""
