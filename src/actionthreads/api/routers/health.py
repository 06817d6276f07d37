from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from actionthreads.api import deps
from actionthreads.services.health import check_db, check_modelhub

router = APIRouter(prefix="/health", tags=["health"])

@router.get("/liveness")
async def liveness():
    """Verify whether the API is ready to receive traffic."""
    return {"status": "ok"}

@router.get("/readiness")
async def readiness(session: AsyncSession = Depends(deps.get_db)):
    """Verify whether the API is ready to process traffic.

    The database is required; the model provider only degrades transcript
    updates (their action point generation reports a failure).
    """
    checks = {
        "database": "ok" if await check_db(session) else "unreachable",
        "modelhub": "configured" if check_modelhub() else "not_configured",
    }
    ready = checks["database"] == "ok"
    return {"status": "ready" if ready else "degraded", "checks": checks}
