"""Domain layer of the token exchange."""
