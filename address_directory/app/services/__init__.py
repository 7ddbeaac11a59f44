"""
Service layer abstraction.

Each service encapsulates business logic for a domain and receives its
collaborators (stores, mappers) through its constructor, so API
handlers never talk to the database directly.
"""
