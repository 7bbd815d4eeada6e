"""Shared fixtures and steps for BDD step definitions."""
from __future__ import annotations

import asyncio
from dataclasses import dataclass
from datetime import date

import pytest
from pytest_bdd import given, parsers, then, when

from app import TrackerFacade
from domain.models import ApplicationRow
from infra.persistence import SQLiteDocumentStore
from test.mocks import TrackerHarness


@dataclass
class TrackerContext:
    """Holds mutable state shared across BDD steps."""

    harness: TrackerHarness
    store: SQLiteDocumentStore
    submitted: bool | None = None

    @property
    def facade(self) -> TrackerFacade:
        return self.harness.facade

    def first_row(self) -> ApplicationRow:
        rows = self.facade.table.rows
        assert rows, "table is empty"
        return rows[0]


@pytest.fixture()
def ctx(sqlite_store: SQLiteDocumentStore) -> TrackerContext:
    harness = TrackerHarness(store=sqlite_store)  # type: ignore[arg-type]
    return TrackerContext(harness=harness, store=sqlite_store)


def add_application(ctx: TrackerContext, title: str, company: str, salary: str) -> bool:
    dialog = ctx.facade.create_dialog
    dialog.open()
    for name, value in {
        "company_name": company,
        "job_title": title,
        "location": "Remote",
        "salary": salary,
        "link": "https://jobs.example/1",
    }.items():
        dialog.set_field(name, value)
    ctx.submitted = asyncio.run(dialog.submit())
    return ctx.submitted


def edit_first_row(ctx: TrackerContext, field_name: str, value: str | date) -> bool:
    assert asyncio.run(ctx.facade.row_actions.edit(ctx.first_row()))
    ctx.facade.edit_dialog.set_field(field_name, value)
    ctx.submitted = asyncio.run(ctx.facade.edit_dialog.submit())
    return ctx.submitted


# -- shared steps -----------------------------------------------------------


@given("a signed-in user with no applications")
def given_signed_in(ctx: TrackerContext) -> None:
    asyncio.run(ctx.facade.sign_in())
    assert ctx.facade.table.total == 0


# Quoted values may be empty, which parsers.parse cannot match.
_ADD_PATTERN = (
    r'application for "(?P<title>[^"]*)" at "(?P<company>[^"]*)" '
    r'with salary "(?P<salary>[^"]*)"'
)


@given(parsers.re(r"the user has added an " + _ADD_PATTERN))
def given_added(ctx: TrackerContext, title: str, company: str, salary: str) -> None:
    assert add_application(ctx, title, company, salary)


@when(parsers.re(r"the user adds an " + _ADD_PATTERN))
def when_adds(ctx: TrackerContext, title: str, company: str, salary: str) -> None:
    add_application(ctx, title, company, salary)


@when(parsers.re(r'the user edits the first row setting (?P<field_name>\w+) to "(?P<value>[^"]*)"'))
def when_edits_field(ctx: TrackerContext, field_name: str, value: str) -> None:
    edit_first_row(ctx, field_name, value)


@when(parsers.parse('the user edits the first row setting the date applied to "{value}"'))
def when_edits_date(ctx: TrackerContext, value: str) -> None:
    edit_first_row(ctx, "date_applied", date.fromisoformat(value))


@then(parsers.parse("the submission is {outcome}"))
def then_submission(ctx: TrackerContext, outcome: str) -> None:
    assert ctx.submitted is (outcome == "accepted")


@then(parsers.parse('the first row has status "{status}"'))
def then_first_row_status(ctx: TrackerContext, status: str) -> None:
    assert ctx.first_row().status == status


@then(parsers.parse('the first row was applied on "{display_date}"'))
def then_first_row_date(ctx: TrackerContext, display_date: str) -> None:
    assert ctx.first_row().date_applied == display_date


@then(parsers.re(r"the table shows (?P<count>\d+) applications?"), converters={"count": int})
def then_table_count(ctx: TrackerContext, count: int) -> None:
    assert ctx.facade.table.total == count
    assert len(ctx.facade.get_rows()) == count


@then(parsers.parse('a success notification says "{message}"'))
def then_success(ctx: TrackerContext, message: str) -> None:
    assert message in ctx.harness.notifier.messages("success")


@then(parsers.parse('an error notification says "{message}"'))
def then_error(ctx: TrackerContext, message: str) -> None:
    assert message in ctx.harness.notifier.messages("error")
