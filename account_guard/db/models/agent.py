"""Agent model for the sales staff who own accounts."""
from sqlalchemy import Column, String

from .base import Base

class Agent(Base):
    """Model representing a sales agent in the owner directory."""
    __tablename__ = "Agent"

    referenceid = Column(String, primary_key=True)
    firstname = Column(String, nullable=False, default='')
    lastname = Column(String, nullable=False, default='')

    @property
    def display_name(self) -> str:
        return f"{self.firstname or ''} {self.lastname or ''}".strip()

    def __repr__(self):
        return f"<Agent(referenceid={self.referenceid}, name={self.display_name})>"
