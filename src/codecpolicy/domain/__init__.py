"""Domain layer — shapes, rules, and read-only containers.

This layer depends only on stdlib and pydantic.
It must never import from codec, plugins, client, security, or config.
"""
