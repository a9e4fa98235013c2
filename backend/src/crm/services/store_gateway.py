"""
Store Gateway
Table-oriented access to the hosted database: select, insert, update, delete.
Rows go in and come out as plain dicts keyed by column name.
"""

import enum
import logging
from typing import Any, Dict, List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from crm.errors import RecordNotFound, StoreError, WriteFailure
from crm.models.customer import Customer
from crm.models.enquiry import Enquiry
from crm.models.task import Task

logger = logging.getLogger(__name__)

TABLES = {
    "customers": Customer,
    "enquiries": Enquiry,
    "tasks": Task,
}


def _plain(value):
    # Enum members travel as their stored values
    return value.value if isinstance(value, enum.Enum) else value


def _to_row(instance) -> Dict[str, Any]:
    return {column.key: _plain(getattr(instance, column.key)) for column in instance.__mapper__.column_attrs}


class TableGateway:
    """
    Per-table CRUD over a SQLAlchemy session.
    Every write commits on its own; there is no transaction spanning calls.
    """

    def __init__(self, db: Session):
        self.db = db

    def _model(self, table: str):
        try:
            return TABLES[table]
        except KeyError:
            raise ValueError(f"Unknown table: {table}")

    def _query(self, table: str, filters: Optional[Dict[str, Any]]):
        model = self._model(table)
        query = self.db.query(model)
        for field, value in (filters or {}).items():
            query = query.filter(getattr(model, field) == _plain(value))
        return model, query

    def select(
        self,
        table: str,
        filters: Optional[Dict[str, Any]] = None,
        order_by: Optional[str] = None,
        descending: bool = False,
    ) -> List[Dict[str, Any]]:
        """
        Select rows matching all equality filters

        Args:
            table: Table name
            filters: Column -> value equality predicates
            order_by: Column to order by
            descending: Order direction

        Returns:
            List of row dicts
        """
        try:
            model, query = self._query(table, filters)
            if order_by:
                column = getattr(model, order_by)
                query = query.order_by(column.desc() if descending else column.asc())
            return [_to_row(instance) for instance in query.all()]
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Failed to select from {table}: {str(e)}")
            raise StoreError(f"Failed to read {table}") from e

    def select_one(self, table: str, filters: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        """Return the first row matching the filters, or None"""
        try:
            _, query = self._query(table, filters)
            instance = query.first()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Failed to select from {table}: {str(e)}")
            raise StoreError(f"Failed to read {table}") from e
        return _to_row(instance) if instance is not None else None

    def insert(self, table: str, row: Dict[str, Any]) -> Dict[str, Any]:
        """Insert a row and return it as stored (with id and created_at)"""
        model = self._model(table)
        try:
            instance = model(**{field: _plain(value) for field, value in row.items()})
            self.db.add(instance)
            self.db.commit()
            self.db.refresh(instance)
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Failed to insert into {table}: {str(e)}")
            raise WriteFailure(f"Failed to insert into {table}") from e
        return _to_row(instance)

    def update(self, table: str, row_id, patch: Dict[str, Any]) -> Dict[str, Any]:
        """Apply a patch to one row and return the updated row"""
        model = self._model(table)
        try:
            instance = self.db.query(model).filter(model.id == row_id).first()
            if instance is None:
                raise RecordNotFound(table, row_id)
            for field, value in patch.items():
                setattr(instance, field, _plain(value))
            self.db.commit()
            self.db.refresh(instance)
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Failed to update {table} {row_id}: {str(e)}")
            raise WriteFailure(f"Failed to update {table}") from e
        return _to_row(instance)

    def delete(self, table: str, row_id) -> bool:
        """Delete one row; raises RecordNotFound when absent"""
        model = self._model(table)
        try:
            instance = self.db.query(model).filter(model.id == row_id).first()
            if instance is None:
                raise RecordNotFound(table, row_id)
            self.db.delete(instance)
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Failed to delete from {table} {row_id}: {str(e)}")
            raise WriteFailure(f"Failed to delete from {table}") from e
        return True
