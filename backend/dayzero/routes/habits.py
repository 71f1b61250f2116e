"""
Habit Routes - Endpoints for habit management, logging and metrics
"""
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from dayzero.core.dependencies import (
    get_entitlement_service,
    get_habit_service,
    get_log_service,
    get_profile_service,
)
from dayzero.core.exceptions import (
    EntitlementLimitError,
    HabitNotFoundError,
    StorageUnavailableError,
    ValidationError,
)
from dayzero.models.habit import HabitCreateRequest, HabitUpdateRequest
from dayzero.models.log import AddLogRequest
from dayzero.services import metrics
from dayzero.services.entitlements import EntitlementService
from dayzero.services.habits import HabitService
from dayzero.services.logs import LogService
from dayzero.services.profile import ProfileService

router = APIRouter(prefix="/habits", tags=["habits"])


@router.get("")
async def list_habits(
    tz: Optional[str] = Query(None, description="Timezone override, defaults to the profile"),
    habits: HabitService = Depends(get_habit_service),
    logs: LogService = Depends(get_log_service),
    profiles: ProfileService = Depends(get_profile_service)
):
    """List habits, newest first, with streak and weekly progress"""
    try:
        zone = tz or profiles.get_profile().timezone
        all_logs = logs.all_logs()
        summaries = [
            metrics.summarize_habit(h, all_logs, zone, logs.clock()).model_dump(mode="json")
            for h in habits.list()
        ]
        return {"status": "success", "date": logs.today(zone), "habits": summaries}
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Unexpected error: {str(e)}")


@router.post("")
async def create_habit(
    request: HabitCreateRequest,
    habits: HabitService = Depends(get_habit_service),
    entitlements: EntitlementService = Depends(get_entitlement_service)
):
    """Create a habit if the current plan allows another one"""
    try:
        if not entitlements.can_create_habit():
            raise EntitlementLimitError(f"Plan '{entitlements.get_plan()}' allows no more habits")
        habit = habits.create(
            request.title,
            icon=request.icon,
            target_per_week=request.target_per_week,
            target_times=request.target_times,
            day_id=request.day_id,
            tz=request.tz
        )
        return {
            "status": "success",
            "message": f"Habit '{habit.title}' added successfully",
            "data": habit.model_dump()
        }
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except EntitlementLimitError as e:
        raise HTTPException(status_code=403, detail=str(e))
    except StorageUnavailableError as e:
        raise HTTPException(status_code=503, detail=str(e))
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Unexpected error: {str(e)}")


@router.get("/{habit_id}")
async def get_habit(
    habit_id: str,
    tz: Optional[str] = Query(None),
    habits: HabitService = Depends(get_habit_service),
    logs: LogService = Depends(get_log_service),
    profiles: ProfileService = Depends(get_profile_service)
):
    """Get one habit with its metrics"""
    try:
        habit = habits.get(habit_id)
        zone = tz or profiles.get_profile().timezone
        summary = metrics.summarize_habit(habit, logs.query(habit_id=habit_id), zone, logs.clock())
        return {"status": "success", "data": summary.model_dump(mode="json")}
    except HabitNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except StorageUnavailableError as e:
        raise HTTPException(status_code=503, detail=str(e))
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Unexpected error: {str(e)}")


@router.patch("/{habit_id}")
async def update_habit(
    habit_id: str,
    request: HabitUpdateRequest,
    habits: HabitService = Depends(get_habit_service)
):
    """Edit a habit's title, icon, weekly target or reminder times"""
    try:
        habit = habits.update(habit_id, request)
        return {"status": "success", "data": habit.model_dump()}
    except HabitNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except StorageUnavailableError as e:
        raise HTTPException(status_code=503, detail=str(e))
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Unexpected error: {str(e)}")


@router.delete("/{habit_id}")
async def delete_habit(habit_id: str, habits: HabitService = Depends(get_habit_service)):
    """Delete a habit; deleting twice is not an error"""
    try:
        habits.delete(habit_id)
        return {"status": "success", "habit_id": habit_id}
    except StorageUnavailableError as e:
        raise HTTPException(status_code=503, detail=str(e))
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Unexpected error: {str(e)}")


@router.post("/{habit_id}/logs")
async def add_log(
    habit_id: str,
    request: AddLogRequest,
    quick: bool = Query(False, description="One-tap log: refuse if already logged today"),
    tz: Optional[str] = Query(None),
    logs: LogService = Depends(get_log_service)
):
    """Log a habit with optional mood and note"""
    try:
        if quick and logs.has_logged_today(habit_id, tz=tz):
            raise HTTPException(status_code=409, detail="Habit already logged today")
        log = logs.add_log(
            habit_id,
            note=request.note,
            mood=request.mood,
            date=request.date,
            tz=tz,
            require_habit=True
        )
        return {"status": "success", "data": log.model_dump(mode="json")}
    except HTTPException:
        raise
    except HabitNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except StorageUnavailableError as e:
        raise HTTPException(status_code=503, detail=str(e))
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Unexpected error: {str(e)}")
