"""Domain layer — visit records, day-capacity rules, and statistics.

This layer depends only on stdlib and pydantic.
It must never import from services, infrastructure, commands, or config.
"""
