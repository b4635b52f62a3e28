from app.models.skill import Skill
from app.models.career import Career, CareerRequirementRow
from app.models.user_skill import UserSkill

__all__ = [
    "Skill",
    "Career",
    "CareerRequirementRow",
    "UserSkill",
]
