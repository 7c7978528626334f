"""Domain layer — declarations, errors, merge and path rules.

This layer depends only on stdlib and pydantic.
It must never import from services, infrastructure, plugins, or config.
"""
