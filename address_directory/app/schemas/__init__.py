"""
Pydantic schema definitions for API payloads.

Schemas are separated from the persistence dataclasses in ``models``
to decouple the API representation from storage.
"""
