from pydantic import BaseModel


class AdminStatsResponse(BaseModel):
    total_users: int = 0
    total_job_listings: int = 0
    active_job_listings: int = 0
    total_applications: int = 0
    users_by_type: dict[str, int] = {}
