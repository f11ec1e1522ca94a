"""Base ORM DAO with the common CRUD operations.

Every call opens its own session, runs in a single transaction and closes the
session before returning. Entities handed back are detached but fully loaded.
"""

from typing import Any, Generic, TypeVar

from sqlalchemy import delete, inspect, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from classifieds.dao.exceptions import DeleteException, FetchException, StoreException, UpdateException
from classifieds.db.models import Base
from classifieds.db.mysql import SessionLocal
from classifieds.utils import get_logger

logger = get_logger(__name__)

ModelType = TypeVar("ModelType", bound=Base)


def require(value: Any, name: str) -> Any:
    """Reject a missing argument before any connection is opened."""
    if value is None:
        raise ValueError(f"{name} must not be None")
    return value


def require_preset_id(value: int | None, name: str = "id") -> int | None:
    """Reject a preset ID below 1; MySQL AUTO_INCREMENT replaces 0 with a generated ID."""
    if value is not None and value < 1:
        raise ValueError(f"{name} must be positive, got {value}")
    return value


class OrmDao(Generic[ModelType]):
    """ORM DAO with get/list/save/update/delete for one entity type."""

    entity_name = "entity"

    def __init__(self, model: type[ModelType], session_factory: sessionmaker | None = None):
        """Initialize DAO with model class.

        Args:
            model: SQLAlchemy model class
            session_factory: Session factory, defaults to the package SessionLocal
        """
        self.model = model
        self._session_factory = session_factory or SessionLocal

    def get_by_id(self, id: int) -> ModelType:
        """Get entity by ID.

        Raises:
            FetchException: If the read fails or no entity has this ID
        """
        require(id, "id")
        try:
            with self._session_factory() as session, session.begin():
                out = session.get(self.model, id)
        except SQLAlchemyError as e:
            logger.error(f"Failed to fetch {self.entity_name} #{id}: {e}")
            raise FetchException(f"Failed to fetch {self.entity_name} with id = {id}") from e
        if out is None:
            raise FetchException(f"No such {self.entity_name} with id = {id}")
        return out

    def all_entities(self) -> list[ModelType]:
        """Get every entity, ordered by ID."""
        try:
            with self._session_factory() as session, session.begin():
                stmt = select(self.model).order_by(self.model.id)
                return list(session.execute(stmt).scalars().all())
        except SQLAlchemyError as e:
            logger.error(f"Failed to list {self.entity_name} entities: {e}")
            raise FetchException(f"Failed to list {self.entity_name} entities") from e

    def save(self, entity: ModelType) -> None:
        """Insert the entity, keeping its preset ID if it has one.

        The ID the row ends up with is written back onto ``entity``.

        Raises:
            StoreException: If the insert fails
            ValueError: If ``entity.id`` is preset below 1
        """
        require(entity, self.entity_name)
        require_preset_id(entity.id)
        try:
            with self._session_factory() as session, session.begin():
                row = self._new_row(session, entity, keep_id=True)
                session.add(row)
                session.flush()
                entity.id = row.id
        except SQLAlchemyError as e:
            logger.error(f"Failed to save {self.entity_name}: {e}")
            raise StoreException(f"Failed to save {self.entity_name}") from e
        logger.debug(f"Saved {self.entity_name} #{entity.id}")

    def save_ignore_id(self, entity: ModelType) -> int:
        """Insert the entity under a generated ID; ``entity`` is left untouched.

        Returns:
            The generated ID

        Raises:
            StoreException: If the insert fails
        """
        require(entity, self.entity_name)
        try:
            with self._session_factory() as session, session.begin():
                row = self._new_row(session, entity, keep_id=False)
                session.add(row)
                session.flush()
                new_id = row.id
        except SQLAlchemyError as e:
            logger.error(f"Failed to save {self.entity_name}: {e}")
            raise StoreException(f"Failed to save {self.entity_name}") from e
        return new_id

    def update(self, id: int, entity: ModelType) -> None:
        """Overwrite the row with primary key ``id`` using the fields of ``entity``.

        The ID carried by ``entity`` is ignored and not modified.

        Raises:
            UpdateException: If the update fails or no row has this ID
        """
        require(id, "id")
        require(entity, self.entity_name)
        try:
            with self._session_factory() as session, session.begin():
                existing = session.get(self.model, id)
                if existing is None:
                    raise UpdateException(f"No such {self.entity_name} with id = {id}")
                for key, value in self._column_values(entity).items():
                    setattr(existing, key, value)
                self._copy_relationships(session, entity, existing)
        except SQLAlchemyError as e:
            logger.error(f"Failed to update {self.entity_name} #{id}: {e}")
            raise UpdateException(f"Failed to update {self.entity_name} with id = {id}") from e

    def delete(self, id: int) -> None:
        """Delete the entity with this ID; a missing ID is not an error.

        Raises:
            DeleteException: If the delete fails
        """
        require(id, "id")
        try:
            with self._session_factory() as session, session.begin():
                session.execute(delete(self.model).where(self.model.id == id))
        except SQLAlchemyError as e:
            logger.error(f"Failed to delete {self.entity_name} #{id}: {e}")
            raise DeleteException(f"Failed to delete {self.entity_name} with id = {id}") from e

    # ── HELPERS ───────────────────────────────────────────

    def _column_values(self, entity: ModelType) -> dict[str, Any]:
        """Column attributes of ``entity`` except the primary key."""
        return {attr.key: getattr(entity, attr.key) for attr in inspect(self.model).column_attrs if attr.key != "id"}

    def _new_row(self, session: Session, entity: ModelType, keep_id: bool) -> ModelType:
        """Fresh transient copy of ``entity`` so the insert never touches the caller's object."""
        values = self._column_values(entity)
        if keep_id:
            values["id"] = entity.id
        row = self.model(**values)
        self._copy_relationships(session, entity, row)
        return row

    def _copy_relationships(self, session: Session, source: ModelType, target: ModelType) -> None:
        """Hook for subclasses whose entities carry collections."""
