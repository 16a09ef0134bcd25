"""
Trip management routes.
"""
from fastapi import APIRouter, Depends, status
from typing import List
from app.api.dependencies import get_current_principal, get_trip_service
from app.core.security import Principal
from app.core.utils import format_response
from app.schemas.common import DataResponse, MessageResponse
from app.schemas.trip import TripCreate, TripCreated, TripResponse, TripUpdate
from app.services.trip_service import TripService

router = APIRouter(prefix="/trips", tags=["trips"])


@router.post("", response_model=DataResponse[TripCreated], status_code=status.HTTP_201_CREATED)
def create_trip(
    trip_data: TripCreate,
    principal: Principal = Depends(get_current_principal),
    trips: TripService = Depends(get_trip_service)
):
    """Create a new trip owned by the caller."""
    trip = trips.create(principal, trip_data)
    return format_response(TripCreated(id=trip.id), "Trip created successfully")


@router.get("", response_model=DataResponse[List[TripResponse]])
def list_trips(
    principal: Principal = Depends(get_current_principal),
    trips: TripService = Depends(get_trip_service)
):
    """List all trips (admin) or the caller's trips."""
    return format_response([TripResponse.model_validate(t) for t in trips.list_trips(principal)])


@router.get("/{trip_id}", response_model=DataResponse[TripResponse])
def get_trip(
    trip_id: int,
    principal: Principal = Depends(get_current_principal),
    trips: TripService = Depends(get_trip_service)
):
    """Get trip details."""
    return format_response(TripResponse.model_validate(trips.get(principal, trip_id)))


@router.put("/{trip_id}", response_model=DataResponse[TripResponse])
def update_trip(
    trip_id: int,
    trip_data: TripUpdate,
    principal: Principal = Depends(get_current_principal),
    trips: TripService = Depends(get_trip_service)
):
    """Update a trip that has not been approved yet."""
    # Omitted fields keep their stored value; null clears nullable ones
    patch = trip_data.model_dump(exclude_unset=True)
    trip = trips.update(principal, trip_id, patch)
    return format_response(TripResponse.model_validate(trip), "Trip updated successfully")


@router.patch("/{trip_id}/approve", response_model=MessageResponse)
def approve_trip(
    trip_id: int,
    principal: Principal = Depends(get_current_principal),
    trips: TripService = Depends(get_trip_service)
):
    """Approve (close) a trip. Admin only."""
    trips.approve(principal, trip_id)
    return {"message": "Trip approved and locked successfully"}


@router.patch("/{trip_id}/reopen", response_model=MessageResponse)
def reopen_trip(
    trip_id: int,
    principal: Principal = Depends(get_current_principal),
    trips: TripService = Depends(get_trip_service)
):
    """Reopen an approved trip for editing. Admin only."""
    trips.reopen(principal, trip_id)
    return {"message": "Trip reopened for editing"}


@router.delete("/{trip_id}", response_model=MessageResponse)
def delete_trip(
    trip_id: int,
    principal: Principal = Depends(get_current_principal),
    trips: TripService = Depends(get_trip_service)
):
    """Delete a trip. Admin only."""
    trips.delete(principal, trip_id)
    return {"message": "Trip deleted successfully"}
