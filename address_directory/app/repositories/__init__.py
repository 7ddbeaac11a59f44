"""
Data access layer.

Repositories hold the SQL for one table each and hand back
dataclasses from ``models``.  Services depend on them through
constructor arguments so they can be swapped in tests.
"""
