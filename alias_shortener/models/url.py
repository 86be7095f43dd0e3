from sqlalchemy import Column, Integer, String
from alias_shortener.database.connection import Base


class URL(Base):
    """
    Alias -> target URL mapping.

    Rows are only inserted and deleted, never updated.
    """
    __tablename__ = "url"

    id = Column(Integer, primary_key=True, autoincrement=True)
    # unique=True is the only guard against duplicate aliases
    alias = Column(String, unique=True, nullable=False, index=True)
    url = Column(String, nullable=False)
