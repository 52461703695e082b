"""API request/response models (camelCase on the wire)."""
