"""
Backup service: full JSON dump and restore of the application tables.
"""
import logging
from datetime import date, datetime, timezone
from typing import Any, Dict, List

from pydantic import ValidationError
from sqlalchemy import Date, DateTime, delete, insert, select
from sqlalchemy.exc import DataError, DBAPIError, IntegrityError, SQLAlchemyError, StatementError
from sqlalchemy.orm import Session

from app.core.exceptions import InvalidInputError, StorageError
from app.core.policy import Operation, authorize
from app.core.security import Principal
from app.models import Driver, Route, Trip, User, Vehicle
from app.schemas.backup import BackupDocument

logger = logging.getLogger(__name__)

BACKUP_TABLES = {model.__tablename__: model.__table__ for model in (User, Trip, Driver, Vehicle, Route)}


def backup_filename(now: datetime) -> str:
    return f"backup_fleet_{now.strftime('%Y-%m-%d_%H-%M')}.json"


def _coerce_row(table, row: Dict[str, Any]) -> Dict[str, Any]:
    """Keep known columns and turn ISO strings back into dates."""
    values = {}
    for column in table.columns:
        if column.name not in row:
            continue
        value = row[column.name]
        if isinstance(value, str):
            try:
                if isinstance(column.type, DateTime):
                    value = datetime.fromisoformat(value)
                elif isinstance(column.type, Date):
                    value = date.fromisoformat(value)
            except ValueError as exc:
                raise InvalidInputError(f"Invalid value for {table.name}.{column.name}") from exc
        values[column.name] = value
    return values


class BackupService:
    """Admin-only dump/restore over the whole database."""

    def __init__(self, db: Session):
        self.db = db

    def dump(self, principal: Principal) -> BackupDocument:
        authorize(principal, Operation.BACKUP)
        data: Dict[str, List[Dict[str, Any]]] = {}
        for name, table in BACKUP_TABLES.items():
            rows = self.db.execute(select(table).order_by(table.c.id)).mappings().all()
            data[name] = [dict(row) for row in rows]
        logger.info("Backup generated by %r", principal.username)
        return BackupDocument(timestamp=datetime.now(timezone.utc), data=data)

    def restore(self, principal: Principal, raw: bytes) -> Dict[str, int]:
        """
        Replace table contents with those of a backup document.

        Every table present in the document is emptied and refilled inside a
        single transaction; unknown tables are ignored.
        """
        authorize(principal, Operation.BACKUP)
        try:
            document = BackupDocument.model_validate_json(raw)
        except ValidationError as exc:
            raise InvalidInputError("Invalid or corrupted backup file") from exc

        restored: Dict[str, int] = {}
        try:
            for name, table in BACKUP_TABLES.items():
                if name not in document.data:
                    continue
                rows = [_coerce_row(table, row) for row in document.data[name]]
                self.db.execute(delete(table))
                if rows:
                    self.db.execute(insert(table), rows)
                restored[name] = len(rows)
            self.db.commit()
        except InvalidInputError:
            self.db.rollback()
            raise
        except StatementError as exc:
            self.db.rollback()
            # Bind-time conversion failures and rejected values come from the document
            if not isinstance(exc, DBAPIError) or isinstance(exc, (DataError, IntegrityError)):
                raise InvalidInputError("Backup contains invalid values; nothing was changed") from exc
            logger.error("Restore failed", exc_info=exc)
            raise StorageError("Restore failed; nothing was changed") from exc
        except SQLAlchemyError as exc:
            self.db.rollback()
            logger.error("Restore failed", exc_info=exc)
            raise StorageError("Restore failed; nothing was changed") from exc

        skipped = sorted(set(document.data) - set(BACKUP_TABLES))
        if skipped:
            logger.warning("Restore ignored unknown tables: %s", ", ".join(skipped))
        logger.info("Backup restored by %r: %s", principal.username, restored)
        return restored
