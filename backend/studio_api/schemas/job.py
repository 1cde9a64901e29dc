from studio_api.schemas.base import CamelModel, CountBucket


class JobCreate(CamelModel):
    title: str | None = None
    department: str | None = None
    location: str | None = None
    type: str = "Full-time"
    experience: str | None = None
    description: str | None = None
    requirements: list[str] | None = None
    benefits: list[str] | None = None
    status: str | None = None
    salary_min: float | None = None
    salary_max: float | None = None
    salary_currency: str | None = None
    application_deadline: str | None = None


class JobUpdate(CamelModel):
    title: str | None = None
    department: str | None = None
    location: str | None = None
    type: str | None = None
    experience: str | None = None
    description: str | None = None
    requirements: list[str] | None = None
    benefits: list[str] | None = None
    status: str | None = None
    salary_min: float | None = None
    salary_max: float | None = None
    salary_currency: str | None = None
    application_deadline: str | None = None


class JobResponse(CamelModel):
    id: str
    title: str
    department: str
    location: str
    type: str
    experience: str
    description: str
    requirements: list[str]
    benefits: list[str]
    salary_min: float | None
    salary_max: float | None
    salary_currency: str
    application_deadline: str | None
    status: str
    created_by: str
    created_at: str
    updated_at: str


class JobListResponse(CamelModel):
    jobs: list[JobResponse]
    total: int


class JobMutationResponse(CamelModel):
    message: str
    job: JobResponse


class JobDeleteResponse(CamelModel):
    message: str
    deleted_applications: int


class JobStatsResponse(CamelModel):
    total_jobs: int
    active_jobs: int
    total_applications: int
    recent_applications: int
    status_stats: list[CountBucket]
    department_stats: list[CountBucket]
    location_stats: list[CountBucket]
