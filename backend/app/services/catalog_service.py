"""
Catalog service for drivers, vehicles and routes.
"""
import logging
from typing import List, Type

from pydantic import BaseModel as Schema
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.exceptions import NotFoundError, StorageError
from app.core.policy import Operation, authorize
from app.core.security import Principal
from app.db.base import BaseModel
from app.models.catalog import Driver, Route, Vehicle

logger = logging.getLogger(__name__)

# Model -> (column to sort listings by, label used in messages)
CATALOGS = {
    Driver: (Driver.name, "Driver"),
    Vehicle: (Vehicle.model, "Vehicle"),
    Route: (Route.name, "Route"),
}


class CatalogService:
    """Listing is open to every signed-in user; saving is admin only."""

    def __init__(self, db: Session):
        self.db = db

    def list_entries(self, model: Type[BaseModel]) -> List[BaseModel]:
        sort_column, _ = CATALOGS[model]
        return self.db.query(model).order_by(sort_column).all()

    def save(self, principal: Principal, model: Type[BaseModel], data: Schema) -> BaseModel:
        """Insert when `data.id` is empty, otherwise update that entry."""
        authorize(principal, Operation.MANAGE_CATALOG)
        _, label = CATALOGS[model]
        fields = data.model_dump(exclude={"id"})

        if data.id is None:
            entry = model(**fields)
            self.db.add(entry)
        else:
            entry = self.db.query(model).filter(model.id == data.id).first()
            if not entry:
                raise NotFoundError(label)
            for key, value in fields.items():
                setattr(entry, key, value)

        try:
            self.db.commit()
        except SQLAlchemyError as exc:
            self.db.rollback()
            logger.error("%s save failed", label, exc_info=exc)
            raise StorageError() from exc
        self.db.refresh(entry)
        return entry
