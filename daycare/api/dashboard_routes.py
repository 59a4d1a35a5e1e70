from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from daycare.auth.dependencies import require_care_staff
from daycare.crud import classroom as classroom_crud
from daycare.db import get_db
from daycare.schemas.classroom import DashboardClassroom, DashboardOverview
from daycare.services import attendance_service
from daycare.utils.timezones import center_today

router = APIRouter(prefix="/api/dashboard", tags=["dashboard"])


@router.get("/overview", response_model=DashboardOverview)
async def dashboard_overview(db: AsyncSession = Depends(get_db), user=Depends(require_care_staff)):
    today = center_today()
    classrooms = await classroom_crud.list_active_classrooms(db)
    checked_in = await classroom_crud.count_open_check_ins(db, today)
    signed_in = await attendance_service.list_signed_in_staff(db, today)

    return DashboardOverview(
        classrooms=[
            DashboardClassroom(
                id=c.id,
                name=c.name,
                checked_in_count=checked_in.get(c.id, 0),
                capacity=c.capacity,
            )
            for c in classrooms
        ],
        total_children_checked_in=sum(checked_in.values()),
        total_staff_signed_in=len(signed_in),
    )
