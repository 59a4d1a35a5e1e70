import logging

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from daycare.auth.dependencies import require_care_staff
from daycare.crud import child as child_crud
from daycare.crud import daily_report as report_crud
from daycare.db import get_db
from daycare.models.user_profile import UserProfile
from daycare.schemas.daily_report import DailyReportCreate, DailyReportRead, DailyReportUpdate

log = logging.getLogger(__name__)

router = APIRouter(prefix="/api/daily-reports", tags=["daily-reports"])


async def _get_own_report(db: AsyncSession, report_id: str, user: UserProfile):
    """Authors edit their own reports; directors edit any."""
    report = await report_crud.get_report(db, report_id)
    if not report:
        raise HTTPException(status_code=404, detail="Report not found")
    if report.staff_id != user.id and user.role != "director":
        raise HTTPException(status_code=403, detail="Can only change your own reports")
    return report


@router.post("", response_model=DailyReportRead, status_code=201)
async def create_daily_report(
    body: DailyReportCreate,
    db: AsyncSession = Depends(get_db),
    user=Depends(require_care_staff),
):
    if not await child_crud.get_child(db, body.child_id):
        raise HTTPException(status_code=404, detail="Child not found")
    report = await report_crud.create_report(db, body, user.id)
    log.info("daily report: child=%s report=%s by=%s", body.child_id, report.id, user.id)
    return report


@router.patch("/{report_id}", response_model=DailyReportRead)
async def update_daily_report(
    report_id: str,
    body: DailyReportUpdate,
    db: AsyncSession = Depends(get_db),
    user=Depends(require_care_staff),
):
    report = await _get_own_report(db, report_id, user)
    return await report_crud.update_report(db, report, body)


@router.delete("/{report_id}")
async def delete_daily_report(report_id: str, db: AsyncSession = Depends(get_db), user=Depends(require_care_staff)):
    report = await _get_own_report(db, report_id, user)
    await report_crud.delete_report(db, report)
    log.info("daily report deleted: report=%s by=%s", report_id, user.id)
    return {"ok": True}
