from __future__ import annotations

import math
from datetime import date, tzinfo, timezone
from typing import Mapping
from urllib.parse import urlsplit

from domain.models import (
    ApplicationStatus,
    ApplicationUpdate,
    CreateApplicationForm,
    EditApplicationForm,
    NewApplication,
)
from domain.utils import start_of_day

EARLIEST_DATE_APPLIED = date(1900, 1, 1)

_REQUIRED_TEXT_FIELDS = (
    ("company_name", "Company name is required"),
    ("job_title", "Job title is required"),
    ("location", "Location is required"),
)


class ValidationError(ValueError):
    """Client-side rejection of form input, keyed by field name."""

    def __init__(self, errors: Mapping[str, str]) -> None:
        self.errors = dict(errors)
        super().__init__("; ".join(f"{k}: {v}" for k, v in self.errors.items()))


def parse_salary(raw: str) -> float | None:
    try:
        value = float(raw.strip())
    except ValueError:
        return None
    return value if math.isfinite(value) else None


def is_absolute_url(raw: str) -> bool:
    try:
        parts = urlsplit(raw.strip())
    except ValueError:
        return False
    return bool(parts.scheme) and bool(parts.netloc)


def validate_create_form(form: CreateApplicationForm, owner_id: str) -> NewApplication:
    """
    Validate the add dialog.

    Required fields are checked in display order and the first missing one
    stops validation. The link is optional and salary may be zero.
    """
    for name, message in _REQUIRED_TEXT_FIELDS:
        if not getattr(form, name).strip():
            raise ValidationError({name: message})
    if not form.salary.strip():
        raise ValidationError({"salary": "Salary is required"})

    salary = parse_salary(form.salary)
    if salary is None or salary < 0:
        raise ValidationError({"salary": "Please enter a valid salary amount"})

    try:
        status = ApplicationStatus.parse(form.status)
    except ValueError:
        raise ValidationError({"status": "Please select a valid status"}) from None

    return NewApplication(
        company_name=form.company_name.strip(),
        job_title=form.job_title.strip(),
        location=form.location.strip(),
        salary=salary,
        status=status,
        link=form.link.strip(),
        owner_id=owner_id,
    )


def validate_edit_form(
    form: EditApplicationForm,
    *,
    today: date | None = None,
    tz: tzinfo = timezone.utc,
) -> ApplicationUpdate:
    """
    Validate the edit dialog, collecting every violation.

    Unlike the add dialog, salary must be strictly positive and the link is
    required.
    """
    errors: dict[str, str] = {}
    for name, message in _REQUIRED_TEXT_FIELDS:
        if not getattr(form, name).strip():
            errors[name] = message

    salary = parse_salary(form.salary)
    if salary is None or salary <= 0:
        errors["salary"] = "Salary must be a positive number"

    date_applied = form.date_applied
    if date_applied is None:
        errors["date_applied"] = "Date applied is required"
    elif date_applied < EARLIEST_DATE_APPLIED:
        errors["date_applied"] = "Date applied is too far in the past"
    elif today is not None and date_applied > today:
        errors["date_applied"] = "Date applied cannot be in the future"

    if not form.link.strip():
        errors["link"] = "Job link is required"
    elif not is_absolute_url(form.link):
        errors["link"] = "Please enter a valid URL"

    status: ApplicationStatus | None = None
    try:
        status = ApplicationStatus.parse(form.status)
    except ValueError:
        errors["status"] = "Please select a valid status"

    if errors or salary is None or status is None or date_applied is None:
        raise ValidationError(errors)

    return ApplicationUpdate(
        company_name=form.company_name.strip(),
        job_title=form.job_title.strip(),
        location=form.location.strip(),
        salary=salary,
        status=status,
        link=form.link.strip(),
        date_applied=start_of_day(date_applied, tz),
    )
