"""Tenant-scoped data access client.

``TenantScopedClient`` is the persistence interface request handlers use. For
every model that declares tenant ownership it applies the current tenant (see
``context``) to each operation:

* read-many (``find_many``, ``find_first``, ``count``, ``aggregate``): the
  tenant constraint is AND-ed into the caller's criteria before execution;
* read-one (``find_unique``): the unconstrained row is fetched, then dropped
  when it belongs to a different tenant;
* create: passed through; ownership comes from the parent the caller sets;
* update / delete: the tenant constraint is AND-ed into the match condition,
  so rows of other tenants are simply not matched.

Cross-tenant access never raises: callers see ``None`` or ``count == 0``,
exactly as for rows that do not exist. With no tenant bound every operation
runs unfiltered (admin bypass).
"""

from __future__ import annotations

import enum
import logging
import uuid
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any, TypeVar

from sqlalchemy import (
    ColumnElement,
    UniqueConstraint,
    delete,
    exists,
    func,
    inspect,
    select,
    update,
)
from sqlalchemy.ext.asyncio import AsyncSession

from wedding_platform.database.tenant import TenantOwnership, ownership_for, tenant_criteria
from wedding_platform.exceptions import BusinessRuleException
from wedding_platform.modules.tenancy.context import get_current_tenant

logger = logging.getLogger(__name__)

M = TypeVar("M")


class Operation(str, enum.Enum):
    FIND_MANY = "find_many"
    FIND_FIRST = "find_first"
    FIND_UNIQUE = "find_unique"
    COUNT = "count"
    AGGREGATE = "aggregate"
    CREATE = "create"
    UPDATE = "update"
    UPDATE_MANY = "update_many"
    DELETE = "delete"
    DELETE_MANY = "delete_many"


@dataclass(frozen=True)
class WriteResult:
    """Outcome of an update or delete: the number of rows affected."""

    count: int

    def __bool__(self) -> bool:
        return self.count > 0


class TenantScopedClient:
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    # ------------------------------------------------------------------
    # Scoping helpers
    # ------------------------------------------------------------------

    def _tenant_filter(self, model: type, operation: Operation) -> ColumnElement[bool] | None:
        """Tenant constraint for ``model`` under the current context, if any."""
        if ownership_for(model) is None:
            return None
        tenant_id = get_current_tenant()
        if tenant_id is None:
            logger.debug("Unscoped %s on %s", operation.value, model.__name__)
            return None
        return tenant_criteria(model, tenant_id)

    @staticmethod
    def _primary_key(model: type):
        columns = inspect(model).primary_key
        if len(columns) != 1:
            raise TypeError(f"{model.__name__} must have a single-column primary key")
        return getattr(model, inspect(model).get_property_by_column(columns[0]).key)

    @staticmethod
    def _unique_column(model: type, name: str):
        mapper = inspect(model)
        if name not in mapper.columns:
            raise ValueError(f"{model.__name__} has no column '{name}'")
        column = mapper.columns[name]
        single_column_uniques = {
            next(iter(constraint.columns)).name
            for constraint in mapper.local_table.constraints
            if isinstance(constraint, UniqueConstraint) and len(constraint.columns) == 1
        }
        if not (column.primary_key or column.unique or column.name in single_column_uniques):
            raise ValueError(f"{model.__name__}.{name} is not a unique key")
        return getattr(model, name)

    @staticmethod
    def _check_writable(model: type, rule: TenantOwnership | None, values: dict[str, Any]) -> None:
        locked = set(getattr(model, "__immutable_columns__", ()))
        if rule is not None:
            locked |= rule.ownership_attributes
        touched = sorted(locked & values.keys())
        if touched:
            raise BusinessRuleException(
                f"{model.__name__} fields cannot be changed after creation: {', '.join(touched)}"
            )

    async def _owned_by(
        self, rule: TenantOwnership, instance: object, tenant_id: uuid.UUID
    ) -> bool:
        if rule.is_direct:
            return rule.owner_of(instance) == tenant_id
        pk = self._primary_key(rule.model)
        query = select(
            exists().where(pk == getattr(instance, pk.key)).where(rule.criteria(tenant_id))
        )
        result = await self.session.execute(query)
        return bool(result.scalar())

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def _select(
        self,
        model: type[M],
        operation: Operation,
        where: Iterable[ColumnElement[bool]],
        order_by: Iterable[Any] | None = None,
        limit: int | None = None,
        offset: int | None = None,
    ):
        query = select(model).where(*where).execution_options(populate_existing=True)
        tenant_filter = self._tenant_filter(model, operation)
        if tenant_filter is not None:
            query = query.where(tenant_filter)
        if order_by:
            query = query.order_by(*order_by)
        if offset:
            query = query.offset(offset)
        if limit is not None:
            query = query.limit(limit)
        return query

    async def find_many(
        self,
        model: type[M],
        *where: ColumnElement[bool],
        order_by: Iterable[Any] | None = None,
        limit: int | None = None,
        offset: int | None = None,
    ) -> list[M]:
        query = self._select(model, Operation.FIND_MANY, where, order_by, limit, offset)
        result = await self.session.execute(query)
        return list(result.scalars().all())

    async def find_first(
        self,
        model: type[M],
        *where: ColumnElement[bool],
        order_by: Iterable[Any] | None = None,
    ) -> M | None:
        query = self._select(model, Operation.FIND_FIRST, where, order_by, limit=1)
        result = await self.session.execute(query)
        return result.scalars().first()

    async def count(self, model: type, *where: ColumnElement[bool]) -> int:
        query = select(func.count()).select_from(model).where(*where)
        tenant_filter = self._tenant_filter(model, Operation.COUNT)
        if tenant_filter is not None:
            query = query.where(tenant_filter)
        result = await self.session.execute(query)
        return result.scalar_one()

    async def aggregate(
        self,
        model: type,
        *columns: Any,
        where: Iterable[ColumnElement[bool]] = (),
        group_by: Iterable[Any] = (),
    ) -> list[tuple]:
        """Run an aggregate select over ``model``, e.g. a sum or a count per status.

        The tenant constraint applies to ``model`` exactly as for ``count``.
        """
        query = select(*columns).select_from(model).where(*where)
        tenant_filter = self._tenant_filter(model, Operation.AGGREGATE)
        if tenant_filter is not None:
            query = query.where(tenant_filter)
        if group_by:
            query = query.group_by(*group_by)
        result = await self.session.execute(query)
        return [tuple(row) for row in result.all()]

    async def find_unique(
        self, model: type[M], ident: Any = None, /, **unique_key: Any
    ) -> M | None:
        """Fetch one row by primary key (``ident``) or by one unique column.

        The row is fetched unconstrained and discarded afterwards if the
        current tenant does not own it.
        """
        if ident is not None and unique_key or ident is None and len(unique_key) != 1:
            raise ValueError("find_unique takes either a primary key or exactly one unique column")
        if ident is not None:
            column, value = self._primary_key(model), ident
        else:
            name, value = next(iter(unique_key.items()))
            column = self._unique_column(model, name)

        query = select(model).where(column == value).execution_options(populate_existing=True)
        result = await self.session.execute(query)
        instance = result.scalar_one_or_none()
        if instance is None:
            return None

        rule = ownership_for(model)
        tenant_id = get_current_tenant()
        if rule is None or tenant_id is None:
            return instance
        if not await self._owned_by(rule, instance, tenant_id):
            logger.info(
                "Discarded %s %s outside tenant %s", model.__name__, value, tenant_id,
            )
            return None
        return instance

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    async def create(self, model: type[M], **values: Any) -> M:
        """Insert a row as given; ownership is whatever parent the caller set."""
        instance = model(**values)
        self.session.add(instance)
        await self.session.flush()
        await self.session.refresh(instance)
        return instance

    async def update(self, model: type, ident: Any, /, **values: Any) -> WriteResult:
        pk = self._primary_key(model)
        return await self._update(model, Operation.UPDATE, [pk == ident], values)

    async def update_many(
        self, model: type, *where: ColumnElement[bool], values: dict[str, Any]
    ) -> WriteResult:
        return await self._update(model, Operation.UPDATE_MANY, where, values)

    async def _update(
        self,
        model: type,
        operation: Operation,
        where: Iterable[ColumnElement[bool]],
        values: dict[str, Any],
    ) -> WriteResult:
        if not values:
            raise ValueError("update requires at least one value")
        self._check_writable(model, ownership_for(model), values)

        statement = update(model).where(*where).values(**values)
        tenant_filter = self._tenant_filter(model, operation)
        if tenant_filter is not None:
            statement = statement.where(tenant_filter)
        result = await self.session.execute(
            statement.execution_options(synchronize_session=False)
        )
        return WriteResult(count=result.rowcount)

    async def delete(self, model: type, ident: Any, /) -> WriteResult:
        pk = self._primary_key(model)
        return await self._delete(model, Operation.DELETE, [pk == ident])

    async def delete_many(self, model: type, *where: ColumnElement[bool]) -> WriteResult:
        return await self._delete(model, Operation.DELETE_MANY, where)

    async def _delete(
        self,
        model: type,
        operation: Operation,
        where: Iterable[ColumnElement[bool]],
    ) -> WriteResult:
        statement = delete(model).where(*where)
        tenant_filter = self._tenant_filter(model, operation)
        if tenant_filter is not None:
            statement = statement.where(tenant_filter)
        result = await self.session.execute(
            statement.execution_options(synchronize_session=False)
        )
        return WriteResult(count=result.rowcount)
