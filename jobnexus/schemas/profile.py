from pydantic import BaseModel
from typing import Any, Optional, Union

# Education and experience are free-form: a list of records such as
# {"institution", "degree", "from", "to"}, or plain text.
FreeForm = Optional[Union[list[dict[str, Any]], str]]


class SeekerProfileCreate(BaseModel):
    title: Optional[str] = None
    skills: Optional[list[str]] = None
    education: FreeForm = None
    experience: FreeForm = None
    bio: Optional[str] = None
    location: Optional[str] = None
    phone: Optional[str] = None
    resume: Optional[str] = None


class SeekerProfileUpdate(SeekerProfileCreate):
    pass


class SeekerProfileResponse(SeekerProfileCreate):
    id: int
    user_id: int

    model_config = {"from_attributes": True}


class EmployerProfileCreate(BaseModel):
    company_name: str
    company_size: Optional[str] = None
    industry: Optional[str] = None
    description: Optional[str] = None
    location: Optional[str] = None
    website: Optional[str] = None
    logo: Optional[str] = None


class EmployerProfileUpdate(BaseModel):
    company_name: Optional[str] = None
    company_size: Optional[str] = None
    industry: Optional[str] = None
    description: Optional[str] = None
    location: Optional[str] = None
    website: Optional[str] = None
    logo: Optional[str] = None


class EmployerProfileResponse(EmployerProfileCreate):
    id: int
    user_id: int

    model_config = {"from_attributes": True}
