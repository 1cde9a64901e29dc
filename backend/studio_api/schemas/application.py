from studio_api.schemas.base import CamelModel, CountBucket


class ApplicationCreate(CamelModel):
    job_id: str | None = None
    name: str | None = None
    email: str | None = None
    phone: str | None = None
    resume: str | None = None
    portfolio: str | None = None
    experience: str | None = None
    cover_letter: str | None = None


class ApplicationUpdate(CamelModel):
    status: str | None = None
    notes: str | None = None


class JobBrief(CamelModel):
    id: str
    title: str
    department: str
    location: str


class ApplicationResponse(CamelModel):
    id: str
    job_id: str
    job: JobBrief | None = None
    name: str
    email: str
    phone: str | None
    resume: str
    portfolio: str | None
    experience: str | None
    cover_letter: str
    status: str
    notes: str | None
    reviewed_by: str | None
    reviewed_at: str | None
    created_at: str
    updated_at: str


class ApplicationSubmitted(CamelModel):
    message: str = "Application submitted successfully"
    application_id: str


class ApplicationMutationResponse(CamelModel):
    message: str
    application: ApplicationResponse


class ApplicationListResponse(CamelModel):
    applications: list[ApplicationResponse]
    total: int


class ApplicationStatsResponse(CamelModel):
    status_stats: list[CountBucket]
    job_application_stats: list[CountBucket]
    recent_applications: list[ApplicationResponse]
    total: int
