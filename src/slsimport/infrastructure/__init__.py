"""Infrastructure layer — filesystem probes, module resolution, document loading.

This layer depends on stdlib and third-party libs (ruamel.yaml).
It may import from domain, never from services or plugins.
"""
