from api.endpoints.crud_endpoint import build_crud_router
from models.schemas import Item
from service_dependencies import get_item_repository

router = build_crud_router(Item, get_item_repository, resource="items")
