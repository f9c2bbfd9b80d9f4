"""Request/response models exposed by the HTTP layer."""
