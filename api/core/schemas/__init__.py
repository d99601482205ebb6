from .skill import SkillBase, SkillCreate, SkillUpdate, SkillRead, SkillsDeleted

__all__ = [
    "SkillBase", "SkillCreate", "SkillUpdate", "SkillRead", "SkillsDeleted",
]
