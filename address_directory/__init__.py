"""
Top-level package for the Address Directory API.

All functionality lives in submodules under ``app``; import the ASGI
application as ``address_directory.app.main:app``.
"""

__all__ = []
