"""API infrastructure: request/response models and authentication."""
