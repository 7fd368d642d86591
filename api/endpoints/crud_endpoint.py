import logging
from typing import Callable, List, Optional, Type

from fastapi import APIRouter, Depends, HTTPException, Path, status
from pydantic import BaseModel

from db.base_repository import CRUDRepository
from models.primary_key import resolve_primary_key
from services.crud_service import CRUDService

logger = logging.getLogger(__name__)

def build_crud_router(
    model: Type[BaseModel],
    get_repository: Callable[..., CRUDRepository],
    resource: Optional[str] = None,
    service_class: Type[CRUDService] = CRUDService,
) -> APIRouter:
    """
    Builds an APIRouter exposing list/get/create/update/delete for `model` at /<resource>.

    `get_repository` is a FastAPI dependency returning the repository to delegate to.
    The model's primary key is resolved here, so a model without exactly one
    PrimaryKey field fails when the router is built.
    """
    resolve_primary_key(model)
    name = resource or model.__name__.lower()
    label = model.__name__

    router = APIRouter(
        prefix=f"/{name}",
        tags=[label],
    )

    def get_service(repository: CRUDRepository = Depends(get_repository)) -> CRUDService:
        return service_class(model, repository)

    @router.get(
        "",
        response_model=List[model],
        status_code=status.HTTP_200_OK,
        summary=f"Retrieve all {label} records",
    )
    async def get_all(service: CRUDService = Depends(get_service)):
        items = await service.get_all()
        if items is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"No {label} records found.")
        return items

    @router.get(
        "/{key}",
        response_model=model,
        status_code=status.HTTP_200_OK,
        summary=f"Retrieve a {label} by primary key",
    )
    async def get_one(
        key: str = Path(..., description=f"Primary key of the {label}"),
        service: CRUDService = Depends(get_service),
    ):
        item = await service.get(key)
        if item is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"{label} {key} not found.")
        return item

    @router.post(
        "",
        response_model=model,
        status_code=status.HTTP_201_CREATED,
        summary=f"Create a new {label}",
    )
    async def create(value: model, service: CRUDService = Depends(get_service)):
        created = await service.create(value)
        if created is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"{label} could not be created.")
        return created

    @router.put(
        "/{key}",
        response_model=model,
        status_code=status.HTTP_200_OK,
        summary=f"Update an existing {label}",
    )
    async def update(
        value: model,
        key: str = Path(..., description=f"Primary key of the {label}"),
        service: CRUDService = Depends(get_service),
    ):
        updated = await service.update(key, value)
        if updated is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"{label} {key} not found.")
        return updated

    @router.delete(
        "/{key}",
        response_model=bool,
        status_code=status.HTTP_200_OK,
        summary=f"Delete a {label} by primary key",
    )
    async def delete(
        key: str = Path(..., description=f"Primary key of the {label}"),
        service: CRUDService = Depends(get_service),
    ):
        return await service.delete(key)

    return router
