"""
Address endpoints.

``create_router`` builds the ``/addresses`` routes around one
``AddressService`` instance.  Handlers only translate between HTTP
and service calls; domain exceptions raised by the service are turned
into responses by the handlers registered in ``app.main``.

The collection routes answer both with and without a trailing slash,
so a POST is never redirected.  The search routes are declared before
``/{record_id}`` so that ``/search`` is never parsed as an id.
"""

from typing import List, Optional

from fastapi import APIRouter, Query, status

from address_directory.app.schemas.address import AddressRecordDTO
from address_directory.app.services.address_service import AddressService


def create_router(service: AddressService) -> APIRouter:
    router = APIRouter()

    @router.get("/search", response_model=List[AddressRecordDTO])
    def search_addresses(
        q: Optional[str] = Query(None, description="Keyword matched against every text field"),
    ) -> List[AddressRecordDTO]:
        """Case-insensitive substring search.  Blank or absent ``q`` lists everything."""
        return service.search(q)

    @router.get("/search/name", response_model=List[AddressRecordDTO])
    def search_by_name(name: str = Query(..., description="Part of the name")) -> List[AddressRecordDTO]:
        return service.find_by_name(name)

    @router.get("/search/city", response_model=List[AddressRecordDTO])
    def search_by_city(city: str = Query(..., description="Exact city, any case")) -> List[AddressRecordDTO]:
        return service.find_by_city(city)

    @router.get("/search/email", response_model=List[AddressRecordDTO])
    def search_by_email(email: str = Query(..., description="Exact email, any case")) -> List[AddressRecordDTO]:
        return service.find_by_email(email)

    @router.get("", response_model=List[AddressRecordDTO])
    @router.get("/", response_model=List[AddressRecordDTO], include_in_schema=False)
    def list_addresses() -> List[AddressRecordDTO]:
        return service.get_all()

    @router.post("", response_model=AddressRecordDTO, status_code=status.HTTP_201_CREATED)
    @router.post("/", response_model=AddressRecordDTO, status_code=status.HTTP_201_CREATED, include_in_schema=False)
    def create_address(address_in: AddressRecordDTO) -> AddressRecordDTO:
        """Create a record.  ``id``, ``createdAt`` and ``updatedAt`` in the body are ignored."""
        return service.create(address_in)

    @router.get("/{record_id}", response_model=AddressRecordDTO)
    def get_address(record_id: int) -> AddressRecordDTO:
        return service.get_by_id(record_id)

    @router.put("/{record_id}", response_model=AddressRecordDTO)
    def update_address(record_id: int, address_in: AddressRecordDTO) -> AddressRecordDTO:
        """Replace every mutable field of the record."""
        return service.update(record_id, address_in)

    @router.delete("/{record_id}", status_code=status.HTTP_204_NO_CONTENT)
    def delete_address(record_id: int) -> None:
        service.delete(record_id)
        return None

    return router
