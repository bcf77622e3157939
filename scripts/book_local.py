#!/usr/bin/env python3
"""
Interactive local booking harness (no HTTP).

Usage:
  python3 scripts/book_local.py [student|teacher|admin]

Drives the same BookingWizardUseCase the API uses, one command per step.
Without a role argument the wizard runs as an anonymous guest.
"""

from __future__ import annotations

import sys
from datetime import date, time
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from app.application.use_cases.booking_wizard import BookingWizardUseCase, WizardResult
from app.application.use_cases.catalog_loader import bookable_sessions
from app.domain.entities.participants import ActingUser, GuestDetails, Role, Supervisor
from app.wiring.dependencies import get_booking_wizard_use_case

HELP = """Commands:
  types                      list lesson and theory types
  lesson <id>                choose a driving lesson type
  teori <id>                 choose a theory lesson type
  slot <YYYY-MM-DD> <HH:MM>  choose date and time
  session <id>               choose a theory session
  gear manual|automatic      choose transmission
  student <id>               choose a student (staff only)
  guest                      register guest details
  supervisors                enter supervisors
  back                       go one step back
  terms                      accept the terms
  confirm                    submit the booking
  /new, /quit, /help"""


def _print_result(result: WizardResult) -> None:
    session = result.session
    print(f"\n[{result.status}] step={session.step.value} mode={session.draft.mode}")
    for key, message in result.errors.items():
        print(f"  ! {key}: {message}")
    if result.notice:
        print(f"  notice: {result.notice}")
    if result.price is not None:
        print(f"  total: {result.price.total} kr")
    if result.redirect_url:
        print(f"  booking_id: {session.booking_id}")
        print(f"  redirect:   {result.redirect_url}")


def _print_types(result: WizardResult) -> None:
    session = result.session
    print("Lesson types:")
    for lt in session.lesson_types:
        print(f"  {lt.id:<16} {lt.name} ({lt.duration_minutes} min, {lt.price} kr)")
    print("Theory types:")
    for lt in session.teori_lesson_types:
        print(f"  {lt.id:<16} {lt.name} (supervisors: {'yes' if lt.allows_supervisors else 'no'})")
        for s in bookable_sessions(lt):
            print(f"      {s.id:<20} {s.date} {s.start_time:%H:%M} ({s.available_spots} spots)")


def _ask(label: str) -> str:
    return input(f"  {label}: ").strip()


def _read_supervisors() -> list[Supervisor]:
    supervisors = []
    while True:
        name = _ask("supervisor name (empty to finish)")
        if not name:
            return supervisors
        supervisors.append(
            Supervisor(name=name, email=_ask("email"), phone=_ask("phone"), personal_number=_ask("personal number"))
        )


def _start(uc: BookingWizardUseCase, acting_user: ActingUser | None) -> str:
    started = uc.start(acting_user)
    result = uc.load_catalog(started.session.id)
    _print_result(result)
    _print_types(result)
    return result.session.id


def main() -> None:
    role = sys.argv[1] if len(sys.argv) > 1 else None
    acting_user = ActingUser(id=f"local-{role}", role=Role(role)) if role else None
    uc = get_booking_wizard_use_case()
    wizard_id = _start(uc, acting_user)
    print(HELP)

    while True:
        try:
            line = input("\n> ").strip()
        except (EOFError, KeyboardInterrupt):
            print("\nBye!")
            return
        if not line:
            continue

        cmd, *args = line.split()
        if cmd in ("/quit", "/exit"):
            print("Bye!")
            return
        if cmd == "/help":
            print(HELP)
            continue
        if cmd == "/new":
            wizard_id = _start(uc, acting_user)
            continue

        try:
            if cmd == "types":
                _print_types(uc.view(wizard_id))
                continue
            if cmd == "lesson" and args:
                result = uc.choose_lesson_type(wizard_id, args[0])
            elif cmd == "teori" and args:
                result = uc.choose_teori_lesson_type(wizard_id, args[0])
            elif cmd == "slot" and len(args) == 2:
                result = uc.choose_slot(wizard_id, date.fromisoformat(args[0]), time.fromisoformat(args[1]))
            elif cmd == "session" and args:
                result = uc.choose_teori_session(wizard_id, args[0])
            elif cmd == "gear" and args:
                result = uc.choose_gear(wizard_id, args[0])
            elif cmd == "student" and args:
                result = uc.choose_student(wizard_id, args[0])
            elif cmd == "guest":
                guest = GuestDetails(
                    first_name=_ask("first name"),
                    last_name=_ask("last name"),
                    email=_ask("email"),
                    phone=_ask("phone"),
                    personal_number=_ask("personal number"),
                )
                result = uc.register_guest(wizard_id, guest)
            elif cmd == "supervisors":
                result = uc.submit_supervisors(wizard_id, _read_supervisors())
            elif cmd == "back":
                result = uc.go_back(wizard_id)
            elif cmd == "terms":
                result = uc.accept_terms(wizard_id, True)
            elif cmd == "confirm":
                result = uc.confirm(wizard_id)
            else:
                print("Unknown command, try /help")
                continue
        except ValueError as e:
            print(f"ERROR: {e}")
            continue

        _print_result(result)
        if result.status == "confirmed":
            wizard_id = _start(uc, acting_user)


if __name__ == "__main__":
    main()
