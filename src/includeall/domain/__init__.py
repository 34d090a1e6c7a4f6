"""Domain layer: schema types and the include-path resolver.

This layer depends only on stdlib and pydantic.
It must never import from services, infrastructure, commands, or config.
"""
