from sqlalchemy import JSON, Column, Float, Text
from sqlalchemy.orm import relationship
from studio_api.database import Base


class JobPosting(Base):
    __tablename__ = "job_postings"

    id = Column(Text, primary_key=True)
    title = Column(Text, nullable=False)
    department = Column(Text, nullable=False)
    location = Column(Text, nullable=False)
    type = Column(Text, nullable=False, default="Full-time")
    experience = Column(Text, nullable=False)
    description = Column(Text, nullable=False)
    requirements = Column(JSON, nullable=False)
    benefits = Column(JSON, nullable=False)
    salary_min = Column(Float)
    salary_max = Column(Float)
    salary_currency = Column(Text, nullable=False, default="USD")
    application_deadline = Column(Text)
    status = Column(Text, nullable=False, default="active")
    created_by = Column(Text, nullable=False, default="admin")
    created_at = Column(Text, nullable=False)
    updated_at = Column(Text, nullable=False)

    # No ORM cascade: job_service deletes applications explicitly.
    applications = relationship("Application", back_populates="job", passive_deletes="all")
