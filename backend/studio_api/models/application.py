from sqlalchemy import Column, ForeignKey, Text, UniqueConstraint
from sqlalchemy.orm import relationship
from studio_api.database import Base


class Application(Base):
    __tablename__ = "applications"
    __table_args__ = (UniqueConstraint("job_id", "email"),)

    id = Column(Text, primary_key=True)
    job_id = Column(Text, ForeignKey("job_postings.id"), nullable=False)
    name = Column(Text, nullable=False)
    email = Column(Text, nullable=False)
    phone = Column(Text)
    resume = Column(Text, nullable=False)
    portfolio = Column(Text)
    experience = Column(Text)
    cover_letter = Column(Text, nullable=False)
    status = Column(Text, nullable=False, default="pending")
    notes = Column(Text)
    reviewed_by = Column(Text)
    reviewed_at = Column(Text)
    created_at = Column(Text, nullable=False)
    updated_at = Column(Text, nullable=False)

    job = relationship("JobPosting", back_populates="applications")
