"""Tenant ownership declarations and the query constraints derived from them.

Every mapped model states how its rows belong to a tenant:

* ``__tenant_key__ = "tenant_id"`` -- the row stores the tenant id itself.
* ``__tenant_parent__ = "wedding"`` -- the row belongs to whatever tenant owns
  the target of that many-to-one relationship.
* ``__tenant_exempt__ = True`` -- platform-level data, never scoped.

Rules are derived from the declarative registry, so a new model is scoped as
soon as it declares ownership; ``audit_tenant_coverage`` reports models that
reference tenant-owned tables without declaring anything.
"""

from __future__ import annotations

import functools
import uuid
from dataclasses import dataclass

from sqlalchemy import ColumnElement, inspect, select
from sqlalchemy.orm import InstrumentedAttribute, RelationshipDirection
from sqlalchemy.orm import registry as orm_registry

from wedding_platform.database.base import Base

TENANTS_TABLE = "tenants"


@dataclass(frozen=True)
class TenantOwnership:
    """How one model reaches its tenant.

    Exactly one of ``tenant_column`` (direct ownership) or ``parent``
    (transitive ownership through ``local_column`` -> ``remote_column``) is set.
    """

    model: type
    tenant_column: InstrumentedAttribute | None = None
    parent: type | None = None
    local_column: InstrumentedAttribute | None = None
    remote_column: InstrumentedAttribute | None = None

    @property
    def is_direct(self) -> bool:
        return self.tenant_column is not None

    @property
    def ownership_attributes(self) -> frozenset[str]:
        """Attribute names that decide which tenant a row belongs to."""
        column = self.tenant_column if self.is_direct else self.local_column
        return frozenset({column.key})

    def criteria(self, tenant_id: uuid.UUID) -> ColumnElement[bool]:
        """SQL condition matching only rows owned by ``tenant_id``."""
        if self.tenant_column is not None:
            return self.tenant_column == tenant_id
        parent_rule = ownership_for(self.parent)
        return self.local_column.in_(
            select(self.remote_column).where(parent_rule.criteria(tenant_id))
        )

    def owner_of(self, instance: object) -> uuid.UUID | None:
        """Tenant id stored on a directly-owned instance."""
        if self.tenant_column is None:
            raise TypeError(f"{self.model.__name__} does not store its tenant id directly")
        return getattr(instance, self.tenant_column.key)


def _declared(model: type, name: str):
    return getattr(model, name, None)


@functools.cache
def ownership_for(model: type) -> TenantOwnership | None:
    """Resolve the ownership rule of ``model``, or None for unscoped models."""
    tenant_key = _declared(model, "__tenant_key__")
    parent_name = _declared(model, "__tenant_parent__")

    if tenant_key and parent_name:
        raise TypeError(
            f"{model.__name__} declares both __tenant_key__ and __tenant_parent__"
        )
    if tenant_key:
        return TenantOwnership(model=model, tenant_column=getattr(model, tenant_key))
    if not parent_name:
        return None

    mapper = inspect(model)
    relationship = mapper.relationships[parent_name]
    if relationship.direction is not RelationshipDirection.MANYTOONE:
        raise TypeError(
            f"{model.__name__}.{parent_name} must be a many-to-one relationship to scope by tenant"
        )
    if len(relationship.local_remote_pairs) != 1:
        raise TypeError(f"{model.__name__}.{parent_name} must join on a single column")

    parent = relationship.mapper.class_
    if ownership_for(parent) is None:
        raise TypeError(
            f"{model.__name__}.{parent_name} points at {parent.__name__}, which is not tenant-owned"
        )

    local, remote = relationship.local_remote_pairs[0]
    local_key = mapper.get_property_by_column(local).key
    remote_key = relationship.mapper.get_property_by_column(remote).key
    return TenantOwnership(
        model=model,
        parent=parent,
        local_column=getattr(model, local_key),
        remote_column=getattr(parent, remote_key),
    )


def tenant_criteria(model: type, tenant_id: uuid.UUID) -> ColumnElement[bool] | None:
    """Condition restricting ``model`` to ``tenant_id``; None for unscoped models."""
    rule = ownership_for(model)
    if rule is None:
        return None
    return rule.criteria(tenant_id)


def is_tenant_exempt(model: type) -> bool:
    return bool(_declared(model, "__tenant_exempt__"))


def tenant_owned_models(registry: orm_registry | None = None) -> list[type]:
    """Every mapped model that carries a tenant ownership rule."""
    if registry is None:
        registry = Base.registry
    models = [mapper.class_ for mapper in registry.mappers]
    return sorted(
        (model for model in models if ownership_for(model) is not None),
        key=lambda model: model.__name__,
    )


def audit_tenant_coverage(registry: orm_registry | None = None) -> list[str]:
    """Names of models that reference tenant data without declaring ownership.

    A model is flagged when its table has a foreign key into ``tenants`` or
    into the table of a tenant-owned model, yet it declares neither an
    ownership rule nor ``__tenant_exempt__``.
    """
    if registry is None:
        registry = Base.registry
    owned_tables = {inspect(model).local_table.name for model in tenant_owned_models(registry)}
    owned_tables.add(TENANTS_TABLE)

    uncovered = []
    for mapper in registry.mappers:
        model = mapper.class_
        if ownership_for(model) is not None or is_tenant_exempt(model):
            continue
        referenced = {fk.column.table.name for fk in mapper.local_table.foreign_keys}
        if referenced & owned_tables:
            uncovered.append(model.__name__)
    return sorted(uncovered)
