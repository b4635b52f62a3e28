"""
Requirement Resolver

Resolves a career slug to its ordered list of skill requirements.

Importance Tiers:
    essential     - must-have for the role
    important     - expected by most employers
    nice-to-have  - differentiator

Older admin screens stored tiers as high / medium / low; those are mapped
onto the tiers above when requirements are loaded.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Iterable, List, Optional, Tuple
import logging

logger = logging.getLogger(__name__)


class CareerNotFoundError(Exception):
    """Raised when a career slug does not resolve."""

    def __init__(self, slug: str):
        super().__init__(f"Career not found: {slug}")
        self.slug = slug


class Importance(str, Enum):
    ESSENTIAL = "essential"
    IMPORTANT = "important"
    NICE_TO_HAVE = "nice-to-have"

    @classmethod
    def parse(cls, value: object) -> "Importance":
        """
        Parse a stored importance value, accepting legacy tiers.

        Unknown values fall back to IMPORTANT with a warning.
        """
        if isinstance(value, cls):
            return value
        text = str(value or "").strip().lower().replace("_", "-")
        if text in _LEGACY_IMPORTANCE:
            return _LEGACY_IMPORTANCE[text]
        try:
            return cls(text)
        except ValueError:
            logger.warning(f"Unknown importance '{value}', treating as important")
            return cls.IMPORTANT


_LEGACY_IMPORTANCE: Dict[str, Importance] = {
    "high": Importance.ESSENTIAL,
    "critical": Importance.ESSENTIAL,
    "medium": Importance.IMPORTANT,
    "low": Importance.NICE_TO_HAVE,
    "nice to have": Importance.NICE_TO_HAVE,
}


@dataclass(frozen=True)
class CareerRequirement:
    skill_id: str
    required_level: int
    importance: Importance


@dataclass(frozen=True)
class CareerPath:
    """
    A career with its ordered requirements.

    Attributes:
        id: Canonical career identifier
        slug: Public URL identifier
        name: Display name
        requirements: Requirements in administrator order
    """
    id: str
    slug: str
    name: str
    requirements: Tuple[CareerRequirement, ...] = ()


class RequirementResolver:
    """
    Lookup of careers by slug, preserving catalog order for listings.
    """

    def __init__(self, careers: Iterable[CareerPath] = ()):
        self._careers: List[CareerPath] = list(careers)
        self._by_slug: Dict[str, CareerPath] = {c.slug: c for c in self._careers}

    def __len__(self) -> int:
        return len(self._careers)

    def careers(self) -> List[CareerPath]:
        return list(self._careers)

    def find(self, slug: str) -> Optional[CareerPath]:
        return self._by_slug.get(slug)

    def resolve(self, slug: str) -> CareerPath:
        """
        Resolve a career slug.

        Raises:
            CareerNotFoundError: If no career has this slug
        """
        career = self.find(slug)
        if career is None:
            raise CareerNotFoundError(slug)
        return career

    @classmethod
    def from_records(cls, records: Iterable[dict]) -> "RequirementResolver":
        """
        Build a resolver from plain dicts.

        Args:
            records: Dicts with keys id, slug, name and requirements, the
                latter a list of {skill_id, required_level, importance}

        Returns:
            Populated RequirementResolver
        """
        careers = []
        for record in records:
            requirements = tuple(
                CareerRequirement(
                    skill_id=str(req["skill_id"]),
                    required_level=int(req.get("required_level", 1)),
                    importance=Importance.parse(req.get("importance")),
                )
                for req in record.get("requirements") or []
            )
            careers.append(CareerPath(
                id=str(record["id"]),
                slug=record["slug"],
                name=record.get("name") or record["slug"],
                requirements=requirements,
            ))
        return cls(careers)
