from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """Declarative base shared by every Taskboard model."""

    # Models use plain ``Column`` attributes with ordinary type hints.
    __allow_unmapped__ = True
