"""Generic repository base for SQLAlchemy 2.x aggregates.

Every repository shares the same persistence rules:

- sorting, equality filters and updates only touch whitelisted attributes,
- pages are stable because the primary key always breaks ties,
- soft-deletable aggregates override ``_soft_delete``.

Repositories flush but never commit or roll back; the Unit of Work owns the
transaction.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass
from typing import Any, Generic, TypeVar, cast

from sqlalchemy import ColumnElement, Select, func, select
from sqlalchemy.orm import InstrumentedAttribute, Session

from rentaride.core.extensions import db

E = TypeVar("E")  # SQLAlchemy mapped entity type


@dataclass(slots=True)
class Pagination:
    """Requested page.

    :param page: 1-based page number.
    :param limit: Page size.
    :param sort: Public sort tokens, ``-`` prefix for descending
        (e.g. ``["-created_at", "brand"]``).
    """

    page: int
    limit: int
    sort: list[str]

    @property
    def offset(self) -> int:
        return (max(self.page, 1) - 1) * max(self.limit, 1)


@dataclass(slots=True)
class Page(Generic[E]):
    """One page of results plus the unpaginated total."""

    items: Sequence[E]
    total: int
    page: int
    limit: int


def sort_clauses(
    tokens: Iterable[str],
    whitelist: Mapping[str, InstrumentedAttribute[Any]],
) -> list[Any]:
    """Translate sort tokens into ``ORDER BY`` clauses; unknown keys are dropped."""
    clauses: list[Any] = []
    for token in tokens:
        name = token.strip()
        descending = name.startswith("-")
        column = whitelist.get(name.lstrip("-"))
        if column is not None:
            clauses.append(column.desc() if descending else column.asc())
    return clauses


class BaseRepository(Generic[E]):
    """Persistence-only repository for a single aggregate.

    Subclasses set ``model`` and override the whitelist hooks they need.
    """

    model: type[E]

    def __init__(self, session: Session | None = None) -> None:
        # ``None`` means the Flask-scoped ``db.session``
        self._session = session

    @property
    def session(self) -> Session:
        return self._session if self._session is not None else cast(Session, db.session)

    # ------------------------------ Hooks --------------------------------

    def _sortable_fields(self) -> Mapping[str, InstrumentedAttribute[Any]]:
        return {}

    def _filterable_fields(self) -> Mapping[str, InstrumentedAttribute[Any]]:
        return {}

    def _updatable_fields(self) -> set[str]:
        return set()

    def _soft_delete(self, instance: E) -> bool:
        """Return ``True`` when the instance was soft-deleted instead of removed."""
        return False

    def _pk(self) -> InstrumentedAttribute[Any] | None:
        return getattr(self.model, "id", None)

    # ---------------------------- Statements -----------------------------

    def _select(
        self,
        filters: Mapping[str, Any] | None = None,
        where: Iterable[ColumnElement[bool]] = (),
    ) -> Select[Any]:
        """``SELECT`` the model with whitelisted equality filters and extra clauses.

        ``None`` filter values are skipped so optional query params pass through.
        """
        allowed = self._filterable_fields()
        stmt = select(self.model)
        for key, value in (filters or {}).items():
            if key in allowed and value is not None:
                stmt = stmt.where(allowed[key] == value)
        for clause in where:
            stmt = stmt.where(clause)
        return stmt

    def _ordered(self, stmt: Select[Any], tokens: Iterable[str]) -> Select[Any]:
        clauses = sort_clauses(tokens, self._sortable_fields())
        pk = self._pk()
        if pk is not None:
            clauses.append(pk.asc())
        return stmt.order_by(*clauses) if clauses else stmt

    def _whitelisted_updates(
        self, fields: Mapping[str, Any], *, strict: bool = True
    ) -> dict[str, Any]:
        """Keep updatable keys only.

        :raises ValueError: If ``strict`` and a key is not updatable.
        """
        allowed = self._updatable_fields()
        rejected = sorted(k for k in fields if k not in allowed)
        if rejected and strict:
            raise ValueError(f"Unknown or non-updatable fields: {rejected}")
        return {k: v for k, v in fields.items() if k in allowed}

    # ------------------------------- CRUD --------------------------------

    def add(self, instance: E) -> E:
        """Stage ``instance`` and flush so its primary key is populated."""
        self.session.add(instance)
        self.flush()
        return instance

    def get(self, entity_id: Any) -> E | None:
        return self.session.get(self.model, entity_id)

    def get_for_update(self, entity_id: Any) -> E | None:
        """Load by primary key with ``SELECT ... FOR UPDATE`` where the backend supports it."""
        pk = self._pk()
        if pk is None:
            raise RuntimeError(f"{type(self).__name__} has no primary key to lock on")
        stmt = select(self.model).where(pk == entity_id).with_for_update()
        return cast(E | None, self.session.execute(stmt).scalars().first())

    def find_one(self, **filters: Any) -> E | None:
        return cast(E | None, self.session.execute(self._select(filters)).scalars().first())

    def exists(self, **filters: Any) -> bool:
        stmt = select(self._select(filters).exists())
        return bool(self.session.execute(stmt).scalar())

    def delete(self, instance: E) -> None:
        """Soft-delete when the aggregate supports it, otherwise remove the row."""
        if not self._soft_delete(instance):
            self.session.delete(instance)
        self.flush()

    def flush(self) -> None:
        self.session.flush()

    def assign_updates(
        self,
        instance: E,
        fields: Mapping[str, Any],
        *,
        strict: bool = True,
        flush: bool = True,
    ) -> E:
        """Assign whitelisted ``fields`` through ``setattr`` so ``@validates`` runs."""
        for key, value in self._whitelisted_updates(fields, strict=strict).items():
            setattr(instance, key, value)
        if flush:
            self.flush()
        return instance

    # ----------------------------- Listing -------------------------------

    def list(
        self,
        *,
        filters: Mapping[str, Any] | None = None,
        where: Iterable[ColumnElement[bool]] = (),
        sort: Iterable[str] | None = None,
    ) -> list[E]:
        stmt = self._ordered(self._select(filters, where), sort or [])
        return cast(list[E], list(self.session.execute(stmt).scalars().all()))

    def paginate(
        self,
        pagination: Pagination,
        *,
        filters: Mapping[str, Any] | None = None,
        where: Iterable[ColumnElement[bool]] = (),
    ) -> Page[E]:
        """Return one stable page and the total row count for the same query."""
        stmt = self._select(filters, where)
        count = select(func.count()).select_from(stmt.subquery())
        total = int(self.session.execute(count).scalar_one())

        limit = max(int(pagination.limit), 1)
        page_stmt = self._ordered(stmt, pagination.sort).limit(limit).offset(pagination.offset)
        items = list(self.session.execute(page_stmt).scalars().all())
        return Page(items=cast(list[E], items), total=total, page=pagination.page, limit=limit)
