"""Health check endpoint: database plus today's roster and operator setup."""

from datetime import date

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from phone_collection.adapters.persistence.database import get_session
from phone_collection.adapters.persistence.repositories import (
    SqlRosterRepository,
    SqlUserRepository,
)
from phone_collection.application.use_cases.roster_availability import (
    RosterAvailabilityResolver,
)
from phone_collection.config import settings
from phone_collection.domain.value_objects.business_time import today_in

router = APIRouter(tags=["health"])


async def collect_health(session: AsyncSession, business_day: date) -> dict:
    """Readiness of the next assignment run for *business_day*."""
    warnings: list[str] = []
    agents_on_duty = None
    try:
        users = SqlUserRepository(session)
        agents = await RosterAvailabilityResolver(
            SqlRosterRepository(session), users
        ).available_agents(business_day)
        agents_on_duty = len(agents)
        db_status = "connected"

        operator_id = settings.assignment_operator_id
        if operator_id is None:
            warnings.append("ASSIGNMENT_OPERATOR_ID not set; runs need an explicit operator")
        elif await users.get_by_id(operator_id) is None:
            warnings.append(f"operator {operator_id} does not exist")
        if agents_on_duty == 0:
            warnings.append(f"no agents on duty for {business_day.isoformat()}")
    except Exception as e:
        db_status = f"error: {e}"

    return {
        "status": "ok" if db_status == "connected" and not warnings else "degraded",
        "database": db_status,
        "business_date": business_day.isoformat(),
        "business_timezone": settings.business_timezone,
        "agents_on_duty": agents_on_duty,
        "warnings": warnings,
    }


@router.get("/health")
async def health_check(session: AsyncSession = Depends(get_session)):
    return await collect_health(session, today_in(settings.business_timezone))
