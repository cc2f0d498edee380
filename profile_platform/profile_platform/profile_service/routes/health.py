"""
Liveness and readiness of the profile service.

Readiness means the app's own database answers and its users table exists,
so register and login can be served.
"""
from fastapi import APIRouter, Request, status
from fastapi.responses import JSONResponse

from ..db import check_db_connection, has_users_table

router = APIRouter(tags=["health"])


@router.get("/health")
async def health_check():
    return {"status": "ok"}


@router.get("/ready")
def readiness_check(request: Request):
    engine = request.app.state.engine
    checks = {"database": check_db_connection(engine)}
    checks["users_table"] = checks["database"] and has_users_table(engine)

    ready = all(checks.values())
    return JSONResponse(
        status_code=status.HTTP_200_OK if ready else status.HTTP_503_SERVICE_UNAVAILABLE,
        content={"status": "ready" if ready else "not_ready", "checks": checks},
    )
