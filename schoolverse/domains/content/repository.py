# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Generic content repository.

One ContentRepository class serves every content table; the EntitySpec it
is constructed with supplies the model, required fields, defaults and
ordering. Every operation returns a Result. Database errors are logged
and reported as BACKEND_UNAVAILABLE, integrity violations as
VALIDATION_FAILED. Each successful mutation is committed and then
announced on the event bus as a ContentChanged event.

Example:
    >>> repo = ContentRepository(db, ANNOUNCEMENTS)
    >>> created = await repo.create({"title": "Exam week", "content": "..."})
    >>> result = await repo.get(created.value["id"])
"""

from __future__ import annotations

import copy
import logging
from typing import Any

from sqlalchemy import delete as sa_delete
from sqlalchemy import func, select, update as sa_update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql.elements import ColumnElement

from schoolverse.domains.content.entities import EntitySpec
from schoolverse.domains.content.result import ErrorKind, Result, ValidationFailedError
from schoolverse.infrastructure.database.models import SINGLETON_ID, Base
from schoolverse.infrastructure.events import (
    ContentAction,
    ContentChanged,
    EventBus,
    get_event_bus,
)

logger = logging.getLogger(__name__)

Record = dict[str, Any]


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


class ContentRepository:
    """CRUD operations for one content entity.

    Attributes:
        spec: Entity schema this repository operates on.
    """

    def __init__(
        self,
        db: AsyncSession,
        spec: EntitySpec,
        event_bus: EventBus | None = None,
    ) -> None:
        """Initialize the repository.

        Args:
            db: Async database session.
            spec: Entity schema.
            event_bus: Bus receiving change events (process singleton by default).
        """
        self._db = db
        self.spec = spec
        self._events = event_bus or get_event_bus()

    # =========================================================================
    # Validation
    # =========================================================================

    def _validate(self, data: dict[str, Any], partial: bool) -> None:
        """Check field names, required fields and restricted values.

        Args:
            data: Incoming field values.
            partial: True for updates, where only supplied fields are checked.

        Raises:
            ValidationFailedError: If the data is rejected.
        """
        unknown = sorted(set(data) - self.spec.writable)
        if unknown:
            raise ValidationFailedError(
                f"Unknown or read-only fields for {self.spec.name}: {', '.join(unknown)}"
            )

        if partial:
            missing = [f for f in self.spec.required if f in data and _is_blank(data[f])]
        else:
            missing = [f for f in self.spec.required if _is_blank(data.get(f))]
        if missing:
            raise ValidationFailedError(
                f"Missing required fields for {self.spec.name}: {', '.join(missing)}"
            )

        for field_name, allowed in self.spec.choices.items():
            if field_name in data and data[field_name] not in allowed:
                raise ValidationFailedError(
                    f"Invalid {field_name} '{data[field_name]}', expected one of: "
                    f"{', '.join(allowed)}"
                )

    async def _check_references(self, data: dict[str, Any]) -> None:
        """Check that every referenced row named in the data exists.

        Raises:
            ValidationFailedError: If a referenced row is missing.
            SQLAlchemyError: If the lookup fails.
        """
        for field_name, target in self.spec.references.items():
            value = data.get(field_name)
            if value is None:
                continue
            if await self._db.get(target, value) is None:
                raise ValidationFailedError(
                    f"{field_name} '{value}' does not match any {target.__tablename__} record"
                )

    def _conditions(self, filters: dict[str, Any] | None) -> list[ColumnElement[bool]]:
        """Translate equality filters into WHERE clauses.

        Raises:
            ValidationFailedError: If a filter names an unknown column.
        """
        if not filters:
            return []
        unknown = sorted(set(filters) - self.spec.columns)
        if unknown:
            raise ValidationFailedError(
                f"Unknown filter fields for {self.spec.name}: {', '.join(unknown)}"
            )
        model = self.spec.model
        return [getattr(model, key) == value for key, value in filters.items()]

    def _ordering(self) -> list[Any]:
        terms = []
        for term in self.spec.order_by:
            column = getattr(self.spec.model, term.column)
            clause = column.desc() if term.descending else column.asc()
            if term.nulls_last:
                clause = clause.nulls_last()
            terms.append(clause)
        return terms

    # =========================================================================
    # Internal helpers
    # =========================================================================

    async def _backend_failure(self, operation: str, error: SQLAlchemyError) -> Result[Any]:
        await self._db.rollback()
        if isinstance(error, IntegrityError):
            logger.warning(
                "Integrity violation during %s on %s: %s",
                operation,
                self.spec.name,
                error.orig,
            )
            return Result.failure(
                ErrorKind.VALIDATION_FAILED,
                f"Could not {operation} {self.spec.name}: constraint violated",
            )
        logger.error(
            "Database error during %s on %s: %s",
            operation,
            self.spec.name,
            str(error),
            exc_info=True,
        )
        return Result.failure(
            ErrorKind.BACKEND_UNAVAILABLE,
            f"Could not {operation} {self.spec.name}: database unavailable",
        )

    def _not_found(self, record_id: str) -> Result[Any]:
        return Result.failure(
            ErrorKind.NOT_FOUND,
            f"{self.spec.name} record '{record_id}' not found",
        )

    async def _publish(self, action: ContentAction, record_id: str) -> None:
        await self._events.publish_change(ContentChanged(self.spec.name, action, record_id))

    async def _save(self, instance: Base) -> None:
        await self._db.commit()
        await self._db.refresh(instance)

    # =========================================================================
    # Reads
    # =========================================================================

    async def get(self, record_id: str) -> Result[Record]:
        """Fetch one record by id."""
        try:
            instance = await self._db.get(self.spec.model, record_id)
        except SQLAlchemyError as e:
            return await self._backend_failure("read", e)
        if instance is None:
            return self._not_found(record_id)
        return Result.success(instance.to_dict())

    async def get_singleton(self) -> Result[Record]:
        """Fetch the ``"main"`` row of a singleton section."""
        return await self.get(SINGLETON_ID)

    async def list(self, filters: dict[str, Any] | None = None) -> Result[list[Record]]:
        """List records matching equality filters in the entity's order.

        Args:
            filters: Column/value pairs, e.g. ``{"group_id": gid, "is_active": True}``.

        Returns:
            Result with the (possibly empty) list of records.
        """
        try:
            conditions = self._conditions(filters)
        except ValidationFailedError as e:
            return Result.from_error(e)

        query = select(self.spec.model).where(*conditions).order_by(*self._ordering())
        try:
            result = await self._db.execute(query)
        except SQLAlchemyError as e:
            return await self._backend_failure("list", e)
        return Result.success([row.to_dict() for row in result.scalars().all()])

    async def count(self, filters: dict[str, Any] | None = None) -> Result[int]:
        """Count records matching equality filters."""
        try:
            conditions = self._conditions(filters)
        except ValidationFailedError as e:
            return Result.from_error(e)

        query = select(func.count()).select_from(self.spec.model).where(*conditions)
        try:
            total = await self._db.scalar(query)
        except SQLAlchemyError as e:
            return await self._backend_failure("count", e)
        return Result.success(int(total or 0))

    # =========================================================================
    # Mutations
    # =========================================================================

    async def create(self, data: dict[str, Any]) -> Result[Record]:
        """Insert a new record.

        Defaults from the entity spec are applied for missing fields
        before required fields are checked.
        """
        record = copy.deepcopy(self.spec.defaults)
        record.update(data)
        try:
            self._validate(record, partial=False)
        except ValidationFailedError as e:
            logger.info("Rejected %s create: %s", self.spec.name, e.message)
            return Result.from_error(e)
        try:
            await self._check_references(record)
        except ValidationFailedError as e:
            logger.info("Rejected %s create: %s", self.spec.name, e.message)
            return Result.from_error(e)
        except SQLAlchemyError as e:
            return await self._backend_failure("read", e)

        instance = self.spec.model(**record)
        self._db.add(instance)
        try:
            await self._save(instance)
        except SQLAlchemyError as e:
            return await self._backend_failure("create", e)

        logger.info("Created %s record: %s", self.spec.name, instance.id)
        await self._publish(ContentAction.CREATED, instance.id)
        return Result.success(instance.to_dict())

    async def update(self, record_id: str, data: dict[str, Any]) -> Result[Record]:
        """Replace the supplied fields of an existing record.

        Applying the same update twice leaves the record in the same state.
        """
        try:
            self._validate(data, partial=True)
        except ValidationFailedError as e:
            logger.info("Rejected %s update: %s", self.spec.name, e.message)
            return Result.from_error(e)

        try:
            instance = await self._db.get(self.spec.model, record_id)
            if instance is None:
                return self._not_found(record_id)
            await self._check_references(data)
            for key, value in data.items():
                setattr(instance, key, value)
            await self._save(instance)
        except ValidationFailedError as e:
            logger.info("Rejected %s update: %s", self.spec.name, e.message)
            return Result.from_error(e)
        except SQLAlchemyError as e:
            return await self._backend_failure("update", e)

        logger.info("Updated %s record: %s", self.spec.name, record_id)
        await self._publish(ContentAction.UPDATED, record_id)
        return Result.success(instance.to_dict())

    async def upsert_singleton(self, data: dict[str, Any]) -> Result[Record]:
        """Write the ``"main"`` row, creating it when absent.

        Required fields that are missing or blank fall back to the
        section's default values. Concurrent writers are not detected;
        the last write wins.
        """
        if not self.spec.singleton:
            return Result.failure(
                ErrorKind.VALIDATION_FAILED,
                f"{self.spec.name} is not a singleton section",
            )

        values = dict(data)
        for field_name in self.spec.required:
            if field_name in values and _is_blank(values[field_name]):
                default = self.spec.defaults.get(field_name)
                if default is not None:
                    values[field_name] = default

        try:
            instance = await self._db.get(self.spec.model, SINGLETON_ID)
        except SQLAlchemyError as e:
            return await self._backend_failure("read", e)

        if instance is None:
            record = copy.deepcopy(self.spec.defaults)
            record.update(values)
            try:
                self._validate(record, partial=False)
            except ValidationFailedError as e:
                return Result.from_error(e)
            instance = self.spec.model(id=SINGLETON_ID, **record)
            self._db.add(instance)
            action = ContentAction.CREATED
        else:
            try:
                self._validate(values, partial=True)
            except ValidationFailedError as e:
                return Result.from_error(e)
            for key, value in values.items():
                setattr(instance, key, value)
            action = ContentAction.UPDATED

        try:
            await self._save(instance)
        except SQLAlchemyError as e:
            return await self._backend_failure("save", e)

        logger.info("Saved %s singleton (%s)", self.spec.name, action.value)
        await self._publish(action, SINGLETON_ID)
        return Result.success(instance.to_dict())

    async def delete(self, record_id: str) -> Result[str]:
        """Delete a record by id; returns the deleted id."""
        try:
            instance = await self._db.get(self.spec.model, record_id)
            if instance is None:
                return self._not_found(record_id)
            await self._db.delete(instance)
            await self._db.commit()
        except SQLAlchemyError as e:
            return await self._backend_failure("delete", e)

        logger.info("Deleted %s record: %s", self.spec.name, record_id)
        await self._publish(ContentAction.DELETED, record_id)
        return Result.success(record_id)

    async def delete_where(self, filters: dict[str, Any]) -> Result[list[str]]:
        """Delete every record matching equality filters.

        Returns:
            Result with the ids of the deleted records.
        """
        try:
            conditions = self._conditions(filters)
        except ValidationFailedError as e:
            return Result.from_error(e)
        if not conditions:
            return Result.failure(
                ErrorKind.VALIDATION_FAILED,
                "Refusing to delete without filters",
            )

        model = self.spec.model
        try:
            ids = list((await self._db.scalars(select(model.id).where(*conditions))).all())
            if ids:
                await self._db.execute(sa_delete(model).where(model.id.in_(ids)))
                await self._db.commit()
        except SQLAlchemyError as e:
            return await self._backend_failure("delete", e)

        if ids:
            logger.info("Deleted %d %s records", len(ids), self.spec.name)
        for record_id in ids:
            await self._publish(ContentAction.DELETED, record_id)
        return Result.success(ids)

    async def increment(self, record_id: str, column: str, amount: int = 1) -> Result[Record]:
        """Atomically add ``amount`` to an integer column.

        Used for server-maintained counters such as material downloads.
        """
        if column not in self.spec.columns:
            return Result.failure(
                ErrorKind.VALIDATION_FAILED,
                f"Unknown field for {self.spec.name}: {column}",
            )

        model = self.spec.model
        target = getattr(model, column)
        try:
            result = await self._db.execute(
                sa_update(model)
                .where(model.id == record_id)
                .values({column: target + amount})
                .execution_options(synchronize_session=False)
            )
            if result.rowcount == 0:
                await self._db.rollback()
                return self._not_found(record_id)
            await self._db.commit()
            instance = await self._db.get(model, record_id, populate_existing=True)
        except SQLAlchemyError as e:
            return await self._backend_failure("update", e)

        await self._publish(ContentAction.UPDATED, record_id)
        return Result.success(instance.to_dict())
