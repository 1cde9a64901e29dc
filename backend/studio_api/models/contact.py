from sqlalchemy import JSON, Column, Text
from studio_api.database import Base


class ContactLead(Base):
    __tablename__ = "contact_leads"

    id = Column(Text, primary_key=True)
    name = Column(Text, nullable=False)
    organization = Column(Text, nullable=False)
    email = Column(Text, nullable=False)
    number = Column(Text, nullable=False)
    website = Column(Text)
    services = Column(JSON, nullable=False)
    status = Column(Text, nullable=False, default="new")
    priority = Column(Text, nullable=False, default="medium")
    notes = Column(Text)
    assigned_to = Column(Text)
    follow_up_date = Column(Text)
    created_at = Column(Text, nullable=False)
    updated_at = Column(Text, nullable=False)
