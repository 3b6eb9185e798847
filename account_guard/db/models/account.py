"""Account model for storing CRM company accounts."""
from datetime import datetime

from sqlalchemy import Column, String, DateTime, JSON
from sqlalchemy.orm import validates
from .base import Base
from ...utils.normalization import normalize_company_name
from ...utils.uuid import generate_uuid

class Account(Base):
    """Company account owned by a sales agent."""

    __tablename__ = 'Account'

    id = Column(String, primary_key=True)
    company_name = Column(String, nullable=False, index=True)
    normalized_name = Column(String, nullable=False, index=True, default='')
    referenceid = Column(String, nullable=False, index=True)
    tsm = Column(String)
    manager = Column(String)
    contact_person = Column(JSON, nullable=False, default=list)
    contact_number = Column(JSON, nullable=False, default=list)
    email_address = Column(JSON, nullable=False, default=list)
    address = Column(String)
    delivery_address = Column(String)
    region = Column(String)
    type_client = Column(String)
    industry = Column(String)
    company_group = Column(String)
    status = Column(String, nullable=False, default='Pending')
    date_created = Column(DateTime, nullable=False, default=datetime.utcnow)

    @validates('company_name')
    def _normalize(self, key, value):
        self.normalized_name = normalize_company_name(value or '')
        return value

    @classmethod
    def create(cls, data: dict) -> 'Account':
        """Create a new account record from a prepared submission.

        Args:
            data: Cleaned account fields as returned by prepare_submission
        """
        columns = {column.name for column in cls.__table__.columns}
        fields = {key: value for key, value in data.items() if key in columns}
        fields.setdefault('id', generate_uuid())
        fields.setdefault('date_created', datetime.utcnow())
        return cls(**fields)

    def __repr__(self):
        """String representation."""
        return f"<Account(company_name='{self.company_name}', referenceid='{self.referenceid}')>"
