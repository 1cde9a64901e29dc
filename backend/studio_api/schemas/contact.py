from studio_api.schemas.base import CamelModel, CountBucket


class ContactCreate(CamelModel):
    name: str | None = None
    organization: str | None = None
    email: str | None = None
    number: str | None = None
    website: str | None = None
    services: list[str] | None = None


class ContactUpdate(CamelModel):
    status: str | None = None
    priority: str | None = None
    notes: str | None = None
    assigned_to: str | None = None
    follow_up_date: str | None = None


class ContactResponse(CamelModel):
    id: str
    name: str
    organization: str
    email: str
    number: str
    website: str | None
    services: list[str]
    status: str
    priority: str
    notes: str | None
    assigned_to: str | None
    follow_up_date: str | None
    created_at: str
    updated_at: str


class ContactSubmitted(CamelModel):
    message: str = "Contact form submitted successfully. We will get back to you soon!"
    contact_id: str


class ContactMutationResponse(CamelModel):
    message: str
    contact: ContactResponse


class ContactListResponse(CamelModel):
    contacts: list[ContactResponse]
    total: int


class ContactStatsResponse(CamelModel):
    status_stats: list[CountBucket]
    priority_stats: list[CountBucket]
    service_stats: list[CountBucket]
    monthly_stats: list[CountBucket]
    recent_contacts: list[ContactResponse]
    total: int
