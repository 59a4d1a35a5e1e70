from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from daycare.api.children_routes import to_child_read
from daycare.auth.dependencies import require_roles
from daycare.crud import child as child_crud
from daycare.db import get_db
from daycare.schemas.child import ChildRead

router = APIRouter(prefix="/api/parent", tags=["parent"])


@router.get("/children", response_model=List[ChildRead])
async def my_children(db: AsyncSession = Depends(get_db), user=Depends(require_roles("parent"))):
    """Children linked to the signed-in parent"""
    return [to_child_read(c) for c in await child_crud.list_children_for_parent(db, user.id)]
