from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
from daycare.models.daily_report import DailyReport
from daycare.schemas.daily_report import DailyReportCreate, DailyReportUpdate
from daycare.utils.timezones import center_today


async def create_report(db: AsyncSession, report: DailyReportCreate, staff_id: str):
    new_report = DailyReport(
        child_id=report.child_id,
        staff_id=staff_id,
        date=report.date or center_today(),
        meals=report.meals,
        nap=report.nap,
        activities=report.activities,
        mood=report.mood,
        notes=report.notes,
    )
    db.add(new_report)
    await db.commit()
    await db.refresh(new_report)
    return new_report


async def list_reports_for_child(db: AsyncSession, child_id: str, limit: int = 30):
    result = await db.execute(
        select(DailyReport)
        .where(DailyReport.child_id == child_id)
        .order_by(DailyReport.date.desc(), DailyReport.created_at.desc())
        .limit(limit)
    )
    return result.scalars().all()


async def get_report(db: AsyncSession, report_id: str):
    return await db.get(DailyReport, report_id)


async def update_report(db: AsyncSession, report: DailyReport, updates: DailyReportUpdate):
    for field, value in updates.model_dump(exclude_unset=True).items():
        setattr(report, field, value)
    await db.commit()
    await db.refresh(report)
    return report


async def delete_report(db: AsyncSession, report: DailyReport):
    await db.delete(report)
    await db.commit()
