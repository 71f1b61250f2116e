"""
Log Routes - history queries for the reflection view
"""
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from dayzero.core.dependencies import get_log_service
from dayzero.core.exceptions import ValidationError
from dayzero.services.logs import LogService

router = APIRouter(prefix="/logs", tags=["logs"])


@router.get("")
async def query_logs(
    habit_id: Optional[str] = Query(None),
    start: Optional[str] = Query(None, description="First day YYYY-MM-DD, inclusive"),
    end: Optional[str] = Query(None, description="Last day YYYY-MM-DD, inclusive"),
    logs: LogService = Depends(get_log_service)
):
    """Logs of existing habits, newest first"""
    try:
        results = logs.query(habit_id=habit_id, start=start, end=end)
        return {
            "status": "success",
            "count": len(results),
            "logs": [log.model_dump(mode="json") for log in results]
        }
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Unexpected error: {str(e)}")


@router.get("/days")
async def day_statuses(logs: LogService = Depends(get_log_service)):
    """Per-day done / not-done map derived from the logs"""
    return {"status": "success", "days": logs.day_statuses()}
