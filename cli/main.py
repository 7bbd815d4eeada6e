from __future__ import annotations

import argparse
import asyncio
from datetime import date
from typing import Sequence

from app import TrackerFacade
from domain.models import ApplicationStatus
from domain.services import AuthenticationError, SortColumn
from infra.config import FileSystemConfigProvider
from infra.identity import ProfileIdentityProvider
from infra.interaction import ConsoleNotifier, WebBrowserLinkOpener
from infra.persistence import SQLiteDocumentStore
from infra.runtime import StructuredLogger, SystemClock, UuidIdGenerator
from infra.session import FileSystemSessionStore

_STATUS_CHOICES = [s.value for s in ApplicationStatus]
_SORT_CHOICES = [c.value for c in SortColumn]

# argparse dest -> dialog form field
_FORM_FIELDS = {
    "company": "company_name",
    "title": "job_title",
    "location": "location",
    "salary": "salary",
    "status": "status",
    "link": "link",
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="job-tracker")
    parser.add_argument("--config-dir", default="./config", help="Path to config folder")
    parser.add_argument("-v", "--verbose", action="store_true", help="Show progress messages")
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("login", help="Sign in with the profile in profile.json")
    sub.add_parser("logout")
    sub.add_parser("whoami")

    list_p = sub.add_parser("list", help="List your job applications")
    list_p.add_argument("--sort", choices=_SORT_CHOICES)
    list_p.add_argument("--desc", action="store_true", help="Sort descending")

    add_p = sub.add_parser("add", help="Record a new job application")
    add_p.add_argument("--company", required=True)
    add_p.add_argument("--title", required=True)
    add_p.add_argument("--location", required=True)
    add_p.add_argument("--salary", required=True)
    add_p.add_argument("--status", choices=_STATUS_CHOICES, default=ApplicationStatus.SUBMITTED.value)
    add_p.add_argument("--link", default="")

    edit_p = sub.add_parser("edit", help="Edit an application; omitted fields keep their value")
    edit_p.add_argument("record_id")
    edit_p.add_argument("--company")
    edit_p.add_argument("--title")
    edit_p.add_argument("--location")
    edit_p.add_argument("--salary")
    edit_p.add_argument("--status", choices=_STATUS_CHOICES)
    edit_p.add_argument("--link")
    edit_p.add_argument("--date", type=date.fromisoformat, help="Date applied, YYYY-MM-DD")

    delete_p = sub.add_parser("delete", help="Delete an application permanently")
    delete_p.add_argument("record_id")
    delete_p.add_argument("--yes", action="store_true", help="Skip the confirmation prompt")

    view_p = sub.add_parser("view", help="Open an application's job link")
    view_p.add_argument("record_id")

    config_p = sub.add_parser("config")
    config_p.add_argument("action", choices=["show", "validate"])
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    config_provider = FileSystemConfigProvider(args.config_dir)

    if args.command == "config":
        return _handle_config(args, config_provider)

    errors = config_provider.validate()
    if errors:
        print("Config validation failed:")
        for err in errors:
            print(f"  - {err}")
        return 1

    cfg = config_provider.get_config()
    notifier = ConsoleNotifier(verbose=args.verbose)
    store = SQLiteDocumentStore(UuidIdGenerator(), db_path=cfg.db_path)
    facade = TrackerFacade(
        document_store=store,
        identity=ProfileIdentityProvider(config_provider),
        session_store=FileSystemSessionStore(config_provider.get_session_path()),
        notifier=notifier,
        link_opener=WebBrowserLinkOpener(),
        clock=SystemClock(),
        logger=StructuredLogger() if args.verbose else _QuietLogger(),
        collection=cfg.collection,
        display_tz=config_provider.get_display_timezone(),
        currency=cfg.currency,
    )
    try:
        return asyncio.run(_dispatch(args, facade))
    finally:
        store.close()


async def _dispatch(args: argparse.Namespace, facade: TrackerFacade) -> int:
    if args.command == "login":
        try:
            session = await facade.sign_in()
        except AuthenticationError:
            return 1
        print(f"Signed in as {session.display_name or session.email} ({session.uid})")
        return 0

    session = await facade.start()
    if args.command == "logout":
        if session is None:
            print("Not signed in.")
            return 0
        await facade.sign_out()
        return 0

    if session is None:
        print("Please log in to view your applications.")
        return 1

    if args.command == "whoami":
        print(f"{session.initials} | {session.display_name or '-'} | {session.email or '-'} | {session.uid}")
        return 0

    if facade.table.error is not None:
        return 1

    if args.command == "list":
        return _handle_list(args, facade)
    if args.command == "add":
        return await _handle_add(args, facade)
    if args.command == "edit":
        return await _handle_edit(args, facade)
    if args.command == "delete":
        return await _handle_delete(args, facade)
    if args.command == "view":
        row = facade.find_row(args.record_id)
        if row is None:
            print(f"No application with id {args.record_id}")
            return 1
        print(row.link or "-")
        return 0 if await facade.row_actions.view(row) else 1

    raise SystemExit(f"Unsupported command: {args.command}")


def _handle_list(args: argparse.Namespace, facade: TrackerFacade) -> int:
    if args.sort:
        facade.table.set_sort(args.sort, descending=args.desc)
    views = facade.get_rows()
    for view in views:
        row = view.row
        print(
            f"{row.id} | {row.company_name} | {row.job_title} | {row.location} | "
            f"{view.salary_display} | {row.status} | {row.date_applied} | {row.link or '-'}"
        )
    if views:
        print(f"Total applications: {facade.table.total}")
    else:
        print("No applications yet.")
    return 0


async def _handle_add(args: argparse.Namespace, facade: TrackerFacade) -> int:
    dialog = facade.create_dialog
    dialog.open()
    for dest, field_name in _FORM_FIELDS.items():
        dialog.set_field(field_name, getattr(args, dest))
    if await dialog.submit():
        return 0
    _print_field_errors(dialog.errors)
    return 1


async def _handle_edit(args: argparse.Namespace, facade: TrackerFacade) -> int:
    row = facade.find_row(args.record_id)
    if row is None:
        print(f"No application with id {args.record_id}")
        return 1
    dialog = facade.edit_dialog
    if not await facade.row_actions.edit(row):
        return 1
    for dest, field_name in _FORM_FIELDS.items():
        value = getattr(args, dest)
        if value is not None:
            dialog.set_field(field_name, value)
    if args.date is not None:
        dialog.set_field("date_applied", args.date)
    if await dialog.submit():
        return 0
    _print_field_errors(dialog.errors)
    return 1


async def _handle_delete(args: argparse.Namespace, facade: TrackerFacade) -> int:
    row = facade.find_row(args.record_id)
    if row is None:
        print(f"No application with id {args.record_id}")
        return 1
    actions = facade.row_actions
    actions.request_delete(row)
    if not args.yes:
        answer = await asyncio.to_thread(
            input,
            f"This will permanently delete your job application for {row.job_title} "
            f"at {row.company_name}. Continue? [y/N] ",
        )
        if answer.strip().lower() not in {"y", "yes"}:
            actions.cancel_delete()
            print("Cancelled.")
            return 0
    return 0 if await actions.confirm_delete() else 1


def _handle_config(args: argparse.Namespace, config_provider: FileSystemConfigProvider) -> int:
    errors = config_provider.validate()
    if args.action == "validate":
        if errors:
            for err in errors:
                print(f"  - {err}")
            return 1
        print("Config OK")
        return 0
    if errors:
        print("Config validation failed:")
        for err in errors:
            print(f"  - {err}")
        return 1
    cfg = config_provider.get_config()
    profile = config_provider.get_profile()
    print(f"db_path={cfg.db_path}")
    print(f"collection={cfg.collection}")
    print(f"display_timezone={cfg.display_timezone}")
    print(f"currency={cfg.currency}")
    print(f"Profile: {profile.full_name} ({profile.email})")
    return 0


def _print_field_errors(errors: dict[str, str]) -> None:
    for name, message in errors.items():
        print(f"  - {name}: {message}")


class _QuietLogger:
    """LoggerPort that only surfaces errors when not running verbose."""

    def __init__(self) -> None:
        self._inner = StructuredLogger()

    def info(self, message: str, **fields: object) -> None:
        pass

    def warning(self, message: str, **fields: object) -> None:
        pass

    def error(self, message: str, **fields: object) -> None:
        self._inner.error(message, **fields)


if __name__ == "__main__":
    raise SystemExit(main())
