from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from jobboard.database import Base


class Job(Base):
    __tablename__ = "jobs"

    id = Column(String, primary_key=True, index=True)
    company_id = Column(String, ForeignKey("companies.id", ondelete="CASCADE"), nullable=False, index=True)
    title = Column(String, nullable=False)
    description_html = Column(Text, nullable=False)
    location = Column(String, nullable=False)
    category = Column(String, nullable=False)
    level = Column(String, nullable=False)
    salary = Column(Integer, nullable=True)
    visible = Column(Boolean, nullable=False, default=True)
    posted_at = Column(DateTime(timezone=True), nullable=False, index=True)
    applicant_count = Column(Integer, nullable=False, default=0)  # cached; recomputed on every apply
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    company = relationship("Company", back_populates="jobs")
    applications = relationship("JobApplication", back_populates="job")
