"""
Coach Routes - AI coach quota and questions
"""
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from dayzero.core.dependencies import get_coach_service, get_entitlement_service
from dayzero.core.exceptions import StorageUnavailableError, ValidationError
from dayzero.models.coach import CoachRequest
from dayzero.services.coach import CoachService
from dayzero.services.entitlements import EntitlementService

router = APIRouter(prefix="/coach", tags=["coach"])


@router.get("/quota")
async def coach_quota(
    tz: Optional[str] = Query(None),
    entitlements: EntitlementService = Depends(get_entitlement_service)
):
    """Remaining coach questions for today"""
    try:
        access = entitlements.can_use_coach(tz)
        return {"status": "success", "plan": entitlements.get_plan(), "remaining": access.remaining, **access.model_dump()}
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except StorageUnavailableError as e:
        raise HTTPException(status_code=503, detail=str(e))
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Unexpected error: {str(e)}")


@router.post("/ask")
async def ask_coach(
    request: CoachRequest,
    tz: Optional[str] = Query(None),
    coach: CoachService = Depends(get_coach_service)
):
    """Ask the coach; a used-up allowance is reported in the body, not as an error"""
    try:
        return {"status": "success", **coach.ask(request.prompt, tz).model_dump()}
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except StorageUnavailableError as e:
        raise HTTPException(status_code=503, detail=str(e))
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Unexpected error: {str(e)}")
