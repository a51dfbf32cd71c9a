"""
Category rule schemas.
"""

from pydantic import BaseModel, Field, field_validator
from datetime import datetime


class CategoryRuleBase(BaseModel):
    keyword: str = Field(..., min_length=1, max_length=100)
    category: str = Field(..., min_length=1, max_length=100)

    @field_validator("keyword")
    @classmethod
    def lowercase_keyword(cls, v: str) -> str:
        v = v.strip().lower()
        if not v:
            raise ValueError("Keyword must not be blank")
        return v

    @field_validator("category", mode="before")
    @classmethod
    def strip_category(cls, v):
        return v.strip() if isinstance(v, str) else v


class CategoryRuleCreate(CategoryRuleBase):
    pass


class CategoryRuleUpdate(CategoryRuleBase):
    pass


class CategoryRuleResponse(CategoryRuleBase):
    id: str
    owner: str
    created_at: datetime

    model_config = {"from_attributes": True}
