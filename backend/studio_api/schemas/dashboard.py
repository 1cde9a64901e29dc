from studio_api.schemas.application import ApplicationResponse
from studio_api.schemas.base import CamelModel, CountBucket
from studio_api.schemas.contact import ContactResponse


class DashboardOverview(CamelModel):
    total_jobs: int
    active_jobs: int
    total_applications: int
    pending_applications: int
    total_contacts: int
    new_contacts: int
    jobs_this_month: int
    applications_this_month: int
    contacts_this_month: int
    application_growth: float
    contact_growth: float


class DashboardActivity(CamelModel):
    applications: list[ApplicationResponse]
    contacts: list[ContactResponse]


class DashboardStatistics(CamelModel):
    application_status_stats: list[CountBucket]
    contact_status_stats: list[CountBucket]
    monthly_application_trends: list[CountBucket]
    monthly_contact_trends: list[CountBucket]


class DashboardResponse(CamelModel):
    overview: DashboardOverview
    recent_activities: DashboardActivity
    statistics: DashboardStatistics
