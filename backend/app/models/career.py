"""
Career Models - Career paths and their skill requirements

Requirement Ordering:
    Requirements are read back ordered by `position`, which is the order the
    career administrator listed them in.

Note: `skill_id` is intentionally not a foreign key. A requirement may keep
pointing at a skill that has since been removed from the catalog, and the
gap analysis has to tolerate that.
"""

from sqlalchemy import Column, String, Integer, Text, DateTime, ForeignKey, Index
from sqlalchemy.sql import func
from app.database import Base
import uuid


class Career(Base):
    __tablename__ = "careers"

    id = Column(String, primary_key=True, default=lambda: str(uuid.uuid4()))
    slug = Column(String(255), nullable=False, unique=True, index=True)
    name = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())


class CareerRequirementRow(Base):
    """
    A single skill requirement of a career.

    Attributes:
        career_id: Owning career
        skill_id: Catalog skill id (may be dangling)
        required_level: Target level, 1-5
        importance: essential / important / nice-to-have
            (legacy rows may hold high / medium / low)
        position: Display order within the career
    """

    __tablename__ = "career_requirements"

    id = Column(String, primary_key=True, default=lambda: str(uuid.uuid4()))
    career_id = Column(String, ForeignKey("careers.id", ondelete="CASCADE"), nullable=False)
    skill_id = Column(String, nullable=False)
    required_level = Column(Integer, nullable=False, default=1)
    importance = Column(String(20), nullable=False, default="important")
    position = Column(Integer, nullable=False, default=0)

    __table_args__ = (
        Index("idx_career_requirements_career_position", "career_id", "position"),
    )
