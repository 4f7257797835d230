"""Configuration layer — settings models and logging setup."""
