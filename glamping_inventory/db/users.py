from sqlalchemy import Column, Integer, String

from .database import Base


class User(Base):
    """Display fields of back-office users.

    Accounts are owned by the auth service; the ledger only reads these
    columns to show and search who recorded a movement.
    """
    __tablename__ = "users"

    id = Column(Integer, primary_key=True)
    first_name = Column(String, nullable=True)
    last_name = Column(String, nullable=True)
    email = Column(String, nullable=True, unique=True)

    @property
    def to_schema(self):
        return {
            "id": self.id,
            "first_name": self.first_name,
            "last_name": self.last_name,
            "email": self.email,
        }
