"""
Profile Routes - timezone and daily reset settings
"""
from fastapi import APIRouter, Depends, HTTPException

from dayzero.core.dependencies import get_profile_service
from dayzero.core.exceptions import StorageUnavailableError, ValidationError
from dayzero.models.profile import ProfileUpdateRequest
from dayzero.services.profile import ProfileService

router = APIRouter(prefix="/profile", tags=["profile"])


@router.get("")
async def get_profile(profiles: ProfileService = Depends(get_profile_service)):
    return {"status": "success", "data": profiles.get_profile().model_dump()}


@router.patch("")
async def update_profile(request: ProfileUpdateRequest, profiles: ProfileService = Depends(get_profile_service)):
    """Change timezone, reset hour or locale; existing habits keep their creation day"""
    try:
        return {"status": "success", "data": profiles.update_profile(request).model_dump()}
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except StorageUnavailableError as e:
        raise HTTPException(status_code=503, detail=str(e))
