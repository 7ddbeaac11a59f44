"""
Top-level router for the API.

Aggregates domain routers under the ``/api`` prefix applied in
``app.main``.  Routers are built from already-constructed services
rather than looked up from a global registry.
"""

from fastapi import APIRouter

from address_directory.app.services.address_service import AddressService

from .endpoints import addresses


def create_api_router(address_service: AddressService) -> APIRouter:
    router = APIRouter()
    router.include_router(
        addresses.create_router(address_service), prefix="/addresses", tags=["addresses"]
    )
    return router
