from studio_api.models.admin import AdminAccount
from studio_api.models.job import JobPosting
from studio_api.models.application import Application
from studio_api.models.contact import ContactLead

__all__ = ["AdminAccount", "JobPosting", "Application", "ContactLead"]
