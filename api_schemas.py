"""Request bodies accepted by the HTTP layer."""
from typing import List, Optional
from pydantic import BaseModel


class SkillsRadarRequest(BaseModel):
    currentSkills: Optional[List[str]] = None
    targetRole: Optional[str] = None
    experience: Optional[str] = None
    industry: Optional[str] = None
    location: Optional[str] = None


class CareerSimulationRequest(BaseModel):
    skills: Optional[List[str]] = None
    interests: Optional[List[str]] = None
    experience: Optional[str] = None
    education: Optional[str] = None
    location: Optional[str] = None
    preferredIndustries: Optional[List[str]] = None
    careerGoals: Optional[str] = None
    timeHorizon: Optional[str] = None
    userId: Optional[str] = None
