"""
User Skill Model - A learner's self-reported level per skill

Rows are written by the skill-rating flow (outside the gap engine) and read
as a snapshot when an analysis is requested.

Levels:
    0 = not started, 1-5 = proficiency level reached
"""

from sqlalchemy import Column, String, Integer, Float, DateTime, UniqueConstraint
from sqlalchemy.sql import func
from app.database import Base
import uuid


class UserSkill(Base):
    __tablename__ = "user_skills"

    id = Column(String, primary_key=True, default=lambda: str(uuid.uuid4()))
    user_id = Column(String, nullable=False, index=True)
    skill_id = Column(String, nullable=False)
    current_level = Column(Integer, nullable=False, default=0)
    self_assessment = Column(Float, nullable=True)
    mentor_assessment = Column(Float, nullable=True)
    last_practiced_at = Column(DateTime, nullable=True)
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    __table_args__ = (
        UniqueConstraint("user_id", "skill_id", name="uq_user_skills_user_skill"),
    )
