"""Explicit request validation.

Every validator returns a list of FieldError; an empty list means the payload
is acceptable. Routes raise ValidationFailed before touching the database.
"""
from urllib.parse import urlparse

from email_validator import EmailNotValidError, validate_email

from studio_api.config import settings
from studio_api.errors import FieldError, ValidationFailed
from studio_api.services.workflow import (
    ADMIN_ROLES,
    APPLICATION_STATUSES,
    CONTACT_PRIORITIES,
    CONTACT_STATUSES,
    JOB_STATUSES,
    JOB_TYPES,
)
from studio_api.utils.clock import is_valid_id, parse_iso


def _blank(value) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def _is_email(value) -> bool:
    if not isinstance(value, str):
        return False
    try:
        validate_email(value.strip(), check_deliverability=False)
    except EmailNotValidError:
        return False
    return True


def _is_url(value) -> bool:
    if not isinstance(value, str):
        return False
    parsed = urlparse(value.strip())
    return parsed.scheme in ("http", "https") and bool(parsed.netloc)


def _is_date(value) -> bool:
    try:
        parse_iso(value)
    except (ValueError, TypeError, AttributeError):
        return False
    return True


def _non_empty_list(value) -> bool:
    return (
        isinstance(value, list)
        and len(value) > 0
        and all(isinstance(item, str) and item.strip() for item in value)
    )


def _require(errors: list[FieldError], data: dict, field: str, message: str):
    if _blank(data.get(field)):
        errors.append(FieldError(field, message))


def ensure_valid(errors: list[FieldError]):
    if errors:
        raise ValidationFailed(errors)


def validate_job(data: dict, partial: bool = False) -> list[FieldError]:
    errors: list[FieldError] = []
    required = {
        "title": "Title is required",
        "department": "Department is required",
        "location": "Location is required",
        "experience": "Experience is required",
        "description": "Description is required",
    }
    for field, message in required.items():
        if not partial or field in data:
            _require(errors, data, field, message)

    if (not partial or "type" in data) and data.get("type", "Full-time") not in JOB_TYPES:
        errors.append(FieldError("type", "Invalid job type"))
    if (not partial or "requirements" in data) and not _non_empty_list(data.get("requirements")):
        errors.append(FieldError("requirements", "At least one requirement is needed"))
    if (not partial or "benefits" in data) and not _non_empty_list(data.get("benefits")):
        errors.append(FieldError("benefits", "At least one benefit is needed"))
    if "status" in data and data["status"] not in JOB_STATUSES:
        errors.append(FieldError("status", "Invalid status"))

    salary_min, salary_max = data.get("salary_min"), data.get("salary_max")
    if salary_min is not None and salary_min < 0:
        errors.append(FieldError("salaryMin", "Salary cannot be negative"))
    if salary_min is not None and salary_max is not None and salary_min > salary_max:
        errors.append(FieldError("salaryMax", "Maximum salary must not be below minimum"))
    if data.get("application_deadline") and not _is_date(data["application_deadline"]):
        errors.append(FieldError("applicationDeadline", "Invalid date"))
    return errors


def validate_application(data: dict) -> list[FieldError]:
    errors: list[FieldError] = []
    job_id = data.get("job_id")
    if not isinstance(job_id, str) or not is_valid_id(job_id):
        errors.append(FieldError("jobId", "Valid job ID is required"))
    _require(errors, data, "name", "Name is required")
    if not _is_email(data.get("email")):
        errors.append(FieldError("email", "Valid email is required"))
    if not _is_url(data.get("resume")):
        errors.append(FieldError("resume", "Valid resume URL is required"))
    if not _blank(data.get("portfolio")) and not _is_url(data.get("portfolio")):
        errors.append(FieldError("portfolio", "Portfolio must be a valid URL"))
    cover_letter = data.get("cover_letter") or ""
    if len(cover_letter.strip()) < settings.min_cover_letter_chars:
        errors.append(FieldError(
            "coverLetter",
            f"Cover letter must be at least {settings.min_cover_letter_chars} characters",
        ))
    return errors


def validate_application_update(data: dict) -> list[FieldError]:
    if data.get("status") is not None and data["status"] not in APPLICATION_STATUSES:
        return [FieldError("status", "Invalid status")]
    return []


def validate_contact(data: dict) -> list[FieldError]:
    errors: list[FieldError] = []
    _require(errors, data, "name", "Name is required")
    _require(errors, data, "organization", "Organization is required")
    if not _is_email(data.get("email")):
        errors.append(FieldError("email", "Valid email is required"))
    _require(errors, data, "number", "Phone number is required")
    if not _blank(data.get("website")) and not _is_url(data.get("website")):
        errors.append(FieldError("website", "Website must be a valid URL"))
    if not _non_empty_list(data.get("services")):
        errors.append(FieldError("services", "At least one service must be selected"))
    return errors


def validate_contact_update(data: dict) -> list[FieldError]:
    errors: list[FieldError] = []
    if data.get("status") is not None and data["status"] not in CONTACT_STATUSES:
        errors.append(FieldError("status", "Invalid status"))
    if data.get("priority") is not None and data["priority"] not in CONTACT_PRIORITIES:
        errors.append(FieldError("priority", "Invalid priority"))
    if data.get("follow_up_date") and not _is_date(data["follow_up_date"]):
        errors.append(FieldError("followUpDate", "Invalid date"))
    return errors


def validate_login(data: dict) -> list[FieldError]:
    errors: list[FieldError] = []
    _require(errors, data, "username", "Username is required")
    if not data.get("password"):
        errors.append(FieldError("password", "Password is required"))
    return errors


def validate_admin_create(data: dict) -> list[FieldError]:
    errors: list[FieldError] = []
    if len((data.get("username") or "").strip()) < 3:
        errors.append(FieldError("username", "Username must be at least 3 characters"))
    if not _is_email(data.get("email")):
        errors.append(FieldError("email", "Valid email is required"))
    if len(data.get("password") or "") < 6:
        errors.append(FieldError("password", "Password must be at least 6 characters"))
    if data.get("role", "admin") not in ADMIN_ROLES:
        errors.append(FieldError("role", "Invalid role"))
    return errors


def validate_profile_update(data: dict) -> list[FieldError]:
    errors: list[FieldError] = []
    if data.get("email") is not None and not _is_email(data["email"]):
        errors.append(FieldError("email", "Valid email is required"))
    new_password = data.get("new_password")
    if new_password is not None and len(new_password) < 6:
        errors.append(FieldError("newPassword", "Password must be at least 6 characters"))
    if new_password and not data.get("current_password"):
        errors.append(FieldError(
            "currentPassword", "Current password is required to set new password"
        ))
    return errors
