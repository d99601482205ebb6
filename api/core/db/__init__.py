from .skill_crud import *

__all__ = [
    # skill_crud
    "SkillAlreadyExistsError", "get_all_skills", "get_skill_by_id",
    "create_skill", "create_skills", "update_skill", "delete_skill",
    "delete_all_skills",
]
