from .skill import Skill

__all__ = [
    "Skill",
]
