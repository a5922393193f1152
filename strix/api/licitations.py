"""Licitation API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, status

from strix.api.dependencies import get_current_user, get_licitation_service
from strix.schemas.common import ApiResponse
from strix.schemas.licitation import LicitationCreate, LicitationResponse, LicitationUpdate
from strix.services.auth import CurrentUser
from strix.services.licitation_service import LicitationFields, LicitationService

router = APIRouter(prefix="/api/licitations", tags=["licitations"])


@router.get(
    "", response_model=ApiResponse[list[LicitationResponse]], response_model_exclude_none=True
)
def get_licitations(
    service: Annotated[LicitationService, Depends(get_licitation_service)],
):
    """Get all licitations with their creators."""
    licitations = service.list_all()
    return ApiResponse[list[LicitationResponse]](
        data=[LicitationResponse.model_validate(lic) for lic in licitations]
    )


@router.get(
    "/{licitation_id}",
    response_model=ApiResponse[LicitationResponse],
    response_model_exclude_none=True,
)
def get_licitation(
    licitation_id: int,
    service: Annotated[LicitationService, Depends(get_licitation_service)],
):
    """Get a specific licitation."""
    licitation = service.get_by_id(licitation_id)
    return ApiResponse[LicitationResponse](data=LicitationResponse.model_validate(licitation))


@router.post(
    "",
    response_model=ApiResponse[LicitationResponse],
    response_model_exclude_none=True,
    status_code=status.HTTP_201_CREATED,
)
def create_licitation(
    licitation_data: LicitationCreate,
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    service: Annotated[LicitationService, Depends(get_licitation_service)],
):
    """Create a new licitation owned by the current user."""
    licitation = service.create(current_user.id, LicitationFields(**licitation_data.model_dump()))
    return ApiResponse[LicitationResponse](
        message="Licitation created successfully",
        data=LicitationResponse.model_validate(licitation),
    )


@router.put(
    "/{licitation_id}",
    response_model=ApiResponse[LicitationResponse],
    response_model_exclude_none=True,
)
def update_licitation(
    licitation_id: int,
    licitation_data: LicitationUpdate,
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    service: Annotated[LicitationService, Depends(get_licitation_service)],
):
    """Update a licitation. Only its creator or an admin may do so."""
    licitation = service.update(
        current_user.id,
        current_user.is_admin,
        licitation_id,
        LicitationFields(**licitation_data.model_dump()),
    )
    return ApiResponse[LicitationResponse](
        message="Licitation updated successfully",
        data=LicitationResponse.model_validate(licitation),
    )


@router.delete(
    "/{licitation_id}", response_model=ApiResponse[dict], response_model_exclude_none=True
)
def delete_licitation(
    licitation_id: int,
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    service: Annotated[LicitationService, Depends(get_licitation_service)],
):
    """Delete a licitation permanently."""
    service.delete(current_user.id, current_user.is_admin, licitation_id)
    return ApiResponse[dict](message="Licitation deleted successfully")
