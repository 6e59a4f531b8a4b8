"""Entity routers — one CRUD router per registered entity kind, built by a factory."""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from assetto.database import get_db
from assetto.middleware.auth import get_actor
from assetto.schemas.asset import AssetCreate, AssetUpdate, AssetResponse
from assetto.schemas.common import SuccessResponse
from assetto.schemas.product import ProductCreate, ProductUpdate, ProductResponse
from assetto.schemas.user import UserCreate, UserUpdate, UserResponse
from assetto.schemas.vendor import VendorCreate, VendorUpdate, VendorResponse
from assetto.services import crud
from assetto.services.entity_store import ASSETS, PRODUCTS, USERS, VENDORS, EntityKind

# kind name -> (create schema, update schema, response schema)
ENTITY_SCHEMAS = {
    VENDORS.name: (VendorCreate, VendorUpdate, VendorResponse),
    PRODUCTS.name: (ProductCreate, ProductUpdate, ProductResponse),
    ASSETS.name: (AssetCreate, AssetUpdate, AssetResponse),
    USERS.name: (UserCreate, UserUpdate, UserResponse),
}


def to_response(kind: EntityKind, item) -> dict:
    """Serialize an ORM row through its kind's response schema (camelCase)."""
    response_schema = ENTITY_SCHEMAS[kind.name][2]
    return response_schema.model_validate(item).model_dump(mode="json", by_alias=True)


def build_router(kind: EntityKind) -> APIRouter:
    create_schema, update_schema, response_schema = ENTITY_SCHEMAS[kind.name]
    router = APIRouter(prefix=f"/api/{kind.name}", tags=[kind.name])

    @router.get("", response_model=list[response_schema], name=f"list_{kind.name}")
    def list_items(db: Session = Depends(get_db)):
        return [response_schema.model_validate(i) for i in crud.list_items(db, kind)]

    @router.get("/{item_id}", response_model=response_schema, name=f"get_{kind.name}")
    def get_item(item_id: str, db: Session = Depends(get_db)):
        return response_schema.model_validate(crud.get_item(db, kind, item_id))

    @router.post("", response_model=response_schema, status_code=201, name=f"create_{kind.name}")
    def create_item(
        req: create_schema,
        db: Session = Depends(get_db),
        actor: str = Depends(get_actor),
    ):
        item = crud.create_item(db, kind, req.model_dump(exclude_unset=True), actor)
        return response_schema.model_validate(item)

    @router.put("/{item_id}", response_model=response_schema, name=f"update_{kind.name}")
    def update_item(
        item_id: str,
        req: update_schema,
        db: Session = Depends(get_db),
        actor: str = Depends(get_actor),
    ):
        item = crud.update_item(db, kind, item_id, req.model_dump(exclude_unset=True), actor)
        return response_schema.model_validate(item)

    @router.delete("/{item_id}", response_model=SuccessResponse, response_model_exclude_none=True,
                   name=f"delete_{kind.name}")
    def delete_item(
        item_id: str,
        db: Session = Depends(get_db),
        actor: str = Depends(get_actor),
    ):
        """Soft delete: the record moves to the recycle bin."""
        crud.delete_item(db, kind, item_id, actor)
        return SuccessResponse()

    return router


routers = [build_router(kind) for kind in (VENDORS, PRODUCTS, ASSETS, USERS)]
