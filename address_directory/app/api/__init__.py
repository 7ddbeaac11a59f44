"""
API package containing the HTTP routes.

``router.create_api_router`` returns a router with every domain router
included; ``endpoints`` holds one module per domain.
"""
