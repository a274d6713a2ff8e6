from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    pass


class ViewBase(DeclarativeBase):
    """Read-only mappings over database views; never part of ``create_all``."""
