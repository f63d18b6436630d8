"""
Profile Router - the single user profile and its skill categories.
"""

from typing import Optional

from fastapi import APIRouter, Request
from pydantic import BaseModel, Field

from job_radar.core.skills import SKILL_CATEGORIES


router = APIRouter(prefix="/profile", tags=["profile"])


class ProfileUpdate(BaseModel):
    skills: Optional[list[str]] = None
    experience: Optional[str] = None
    min_hourly_rate: Optional[int] = Field(None, alias="minHourlyRate", ge=0)
    min_project_rate: Optional[int] = Field(None, alias="minProjectRate", ge=0)
    preferred_categories: Optional[list[str]] = Field(None, alias="preferredCategories")


class SkillsRequest(BaseModel):
    skills: list[str]


@router.get("")
def get_profile(request: Request):
    return request.app.state.store.get_profile().to_dict()


@router.post("")
def update_profile(request: Request, update: ProfileUpdate):
    # Only fields present in the request are merged
    partial = update.model_dump(by_alias=True, exclude_unset=True)
    profile = request.app.state.store.save_profile(partial)
    return {"message": "Profile updated successfully", "profile": profile.to_dict()}


@router.get("/skills")
def get_skill_categories():
    return {"categories": SKILL_CATEGORIES}


@router.post("/skills")
def add_skills(request: Request, body: SkillsRequest):
    profile = request.app.state.store.update_skills(add=body.skills)
    return {"message": "Skills added successfully", "skills": profile.skills}


@router.delete("/skills/{skill}")
def remove_skill(request: Request, skill: str):
    profile = request.app.state.store.update_skills(remove=[skill])
    return {"message": "Skill removed successfully", "skills": profile.skills}
