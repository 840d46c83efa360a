from sqlalchemy import Boolean, Column, Index, String, Text
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base

Base = declarative_base()


class TodoRow(Base):
    __tablename__ = "todos"

    id = Column(String(24), primary_key=True)
    owner = Column(String, nullable=False)
    status = Column(Boolean, nullable=False, default=False)
    body = Column(Text, nullable=False)
    category = Column(String, nullable=False)

    __table_args__ = (
        Index("idx_todos_owner", "owner"),
        Index("idx_todos_category", "category"),
    )


def create_all(engine: Engine) -> None:
    Base.metadata.create_all(engine)
