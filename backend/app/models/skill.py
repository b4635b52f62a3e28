"""
Skill Model - Catalog skills with their proficiency ladders

Skills are reference data maintained by the admin skill manager. The
skill-gap engine only reads them.

Proficiency Levels:
    Stored as a JSON list, one entry per rung of the ladder:
    {
        "level": "Beginner",          # tag or numeric level (1-5)
        "title": "Getting started",
        "description": "...",
        "expectations": ["..."],
        "projects": ["..."],
        "hours_to_achieve": 20,
        "prerequisites": ["<skill id>"],
        "resources": [{...}]         # opaque, owned by the content catalog
    }
"""

from sqlalchemy import Column, String, Text, JSON, DateTime
from sqlalchemy.sql import func
from app.database import Base
import uuid


class Skill(Base):
    """
    Catalog skill entity.

    Attributes:
        id: UUID primary key, the canonical skill identifier
        name: Display name (e.g. "Docker")
        slug: URL-safe unique name
        category: Skill family (e.g. "DevOps")
        difficulty: Beginner / Intermediate / Advanced / Expert
        proficiency_levels: Ordered JSON ladder (see module docstring)
    """

    __tablename__ = "skills"

    id = Column(String, primary_key=True, default=lambda: str(uuid.uuid4()))
    name = Column(String(255), nullable=False, index=True)
    slug = Column(String(255), nullable=False, unique=True)
    category = Column(String(100), nullable=False, default="general")
    difficulty = Column(String(20), nullable=False, default="Beginner")
    description = Column(Text, nullable=True)
    proficiency_levels = Column(JSON, nullable=False, default=list)
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    def __repr__(self) -> str:
        return f"<Skill(id='{self.id}', name='{self.name}')>"
