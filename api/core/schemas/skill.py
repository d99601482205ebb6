from pydantic import BaseModel, ConfigDict, field_validator
from typing import Optional


class SkillBase(BaseModel):
    name: str

    @field_validator("name")
    @classmethod
    def _strip_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("name must not be blank")
        return v


class SkillCreate(SkillBase):
    id: Optional[str] = None

    @field_validator("id", mode="before")
    @classmethod
    def _coerce_id(cls, v):
        if v is None:
            return None
        v = str(v).strip()
        return v or None


class SkillUpdate(SkillBase):
    pass


class SkillRead(SkillBase):
    id: str
    normalized: Optional[str] = None
    model_config = ConfigDict(from_attributes=True)


class SkillsDeleted(BaseModel):
    deleted: int
