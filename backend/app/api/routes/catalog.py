"""
Catalog routes for drivers, vehicles and routes.
"""
from fastapi import APIRouter, Depends
from typing import List
from app.api.dependencies import get_catalog_service, get_current_principal
from app.core.security import Principal
from app.core.utils import format_response
from app.models.catalog import Driver, Route, Vehicle
from app.schemas.catalog import (
    DriverResponse, DriverSave,
    RouteResponse, RouteSave,
    VehicleResponse, VehicleSave,
)
from app.schemas.common import DataResponse
from app.services.catalog_service import CatalogService

router = APIRouter(tags=["catalog"])


@router.get("/drivers", response_model=DataResponse[List[DriverResponse]])
def get_drivers(
    principal: Principal = Depends(get_current_principal),
    catalog: CatalogService = Depends(get_catalog_service)
):
    """List drivers by name."""
    return format_response([DriverResponse.model_validate(d) for d in catalog.list_entries(Driver)])


@router.post("/drivers", response_model=DataResponse[DriverResponse])
def save_driver(
    data: DriverSave,
    principal: Principal = Depends(get_current_principal),
    catalog: CatalogService = Depends(get_catalog_service)
):
    """Create or update a driver. Admin only."""
    driver = catalog.save(principal, Driver, data)
    return format_response(DriverResponse.model_validate(driver), "Saved successfully")


@router.get("/vehicles", response_model=DataResponse[List[VehicleResponse]])
def get_vehicles(
    principal: Principal = Depends(get_current_principal),
    catalog: CatalogService = Depends(get_catalog_service)
):
    """List vehicles by model."""
    return format_response([VehicleResponse.model_validate(v) for v in catalog.list_entries(Vehicle)])


@router.post("/vehicles", response_model=DataResponse[VehicleResponse])
def save_vehicle(
    data: VehicleSave,
    principal: Principal = Depends(get_current_principal),
    catalog: CatalogService = Depends(get_catalog_service)
):
    """Create or update a vehicle. Admin only."""
    vehicle = catalog.save(principal, Vehicle, data)
    return format_response(VehicleResponse.model_validate(vehicle), "Saved successfully")


@router.get("/routes", response_model=DataResponse[List[RouteResponse]])
def get_routes(
    principal: Principal = Depends(get_current_principal),
    catalog: CatalogService = Depends(get_catalog_service)
):
    """List routes by name."""
    return format_response([RouteResponse.model_validate(r) for r in catalog.list_entries(Route)])


@router.post("/routes", response_model=DataResponse[RouteResponse])
def save_route(
    data: RouteSave,
    principal: Principal = Depends(get_current_principal),
    catalog: CatalogService = Depends(get_catalog_service)
):
    """Create or update a route. Admin only."""
    route = catalog.save(principal, Route, data)
    return format_response(RouteResponse.model_validate(route), "Saved successfully")
