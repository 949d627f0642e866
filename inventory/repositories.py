"""Repository over a SQLAlchemy session: the only place services touch the ORM session."""

from typing import Any, Generic, TypeVar

from sqlalchemy.orm import Query, Session

from inventory.models import Base

ModelT = TypeVar("ModelT", bound=Base)


class Repository(Generic[ModelT]):
    """
    Basic persistence operations for one mapped model.

    Each write commits on its own; there is no multi-statement transaction, so
    concurrent writers to the same row are last-write-wins.
    """

    def __init__(self, session: Session, model: type[ModelT]) -> None:
        self.session = session
        self.model = model

    def query(self) -> Query:
        """Base query for callers that add filters and ordering before count/list_page."""
        return self.session.query(self.model)

    def find_by_id(self, entity_id: int) -> ModelT | None:
        return self.session.get(self.model, entity_id)

    def find_by_field(self, field: str, value: Any) -> ModelT | None:
        column = getattr(self.model, field)
        return self.query().filter(column == value).first()

    def insert(self, entity: ModelT) -> ModelT:
        self.session.add(entity)
        self.session.commit()
        self.session.refresh(entity)
        return entity

    def update(self, entity: ModelT) -> ModelT:
        self.session.commit()
        self.session.refresh(entity)
        return entity

    def delete(self, entity: ModelT) -> None:
        self.session.delete(entity)
        self.session.commit()

    def count(self, query: Query | None = None) -> int:
        return (query if query is not None else self.query()).count()

    def list_page(self, query: Query, offset: int, limit: int) -> list[ModelT]:
        return query.offset(offset).limit(limit).all()
