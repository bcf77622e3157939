from __future__ import annotations

from dataclasses import replace

from app.domain.entities.booking_draft import BookingDraft, LessonDraft, TeoriDraft


def reset_selection(draft: BookingDraft) -> BookingDraft:
    """Drop the chosen lesson/theory type and everything that hangs off it. Participant identity is kept."""
    return replace(draft, selection=None, supervisors=(), total_price=None)


def start_selection(draft: BookingDraft, selection: LessonDraft | TeoriDraft) -> BookingDraft:
    """Switch the draft to a new mode; supervisors from a previous type never carry over."""
    return replace(draft, selection=selection, supervisors=(), total_price=None)
