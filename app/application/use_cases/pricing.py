from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum

from app.domain.entities.booking_draft import BookingDraft, LessonDraft, TeoriDraft
from app.domain.entities.participants import Role


class SupervisorPricingRule(str, Enum):
    per_supervisor = "per_supervisor"  # every supervisor is charged
    first_free = "first_free"  # first supervisor is covered by the base price


@dataclass(frozen=True)
class PriceBreakdown:
    base_price: Decimal
    discount: Decimal = Decimal(0)
    supervisor_count: int = 0
    chargeable_supervisors: int = 0
    price_per_supervisor: Decimal = Decimal(0)
    supervisor_total: Decimal = Decimal(0)
    total: Decimal = Decimal(0)


class PricingCalculator:
    def __init__(self, rule: SupervisorPricingRule = SupervisorPricingRule.per_supervisor) -> None:
        self._rule = SupervisorPricingRule(rule)

    def calculate(self, draft: BookingDraft, role: Role | None) -> PriceBreakdown | None:
        """Price for the draft, or None while there is nothing priceable yet."""
        selection = draft.selection
        if isinstance(selection, LessonDraft):
            return self._lesson_price(selection, role)
        if isinstance(selection, TeoriDraft) and selection.session is not None:
            return self._teori_price(selection, len(draft.supervisors))
        return None

    def chargeable_supervisors(self, supervisor_count: int) -> int:
        if self._rule is SupervisorPricingRule.first_free:
            return max(0, supervisor_count - 1)
        return supervisor_count

    def _lesson_price(self, selection: LessonDraft, role: Role | None) -> PriceBreakdown:
        lesson_type = selection.lesson_type
        price = lesson_type.price
        student_price = lesson_type.price_student
        if role is Role.student and student_price is not None and student_price != price:
            return PriceBreakdown(base_price=price, discount=price - student_price, total=student_price)
        return PriceBreakdown(base_price=price, total=price)

    def _teori_price(self, selection: TeoriDraft, supervisor_count: int) -> PriceBreakdown:
        base = selection.session.price
        if not selection.lesson_type.allows_supervisors or supervisor_count == 0:
            return PriceBreakdown(base_price=base, total=base)

        per_supervisor = (
            selection.lesson_type.price_per_supervisor
            if selection.lesson_type.price_per_supervisor is not None
            else selection.session.price_per_supervisor
        ) or Decimal(0)
        chargeable = self.chargeable_supervisors(supervisor_count)
        supervisor_total = per_supervisor * chargeable
        return PriceBreakdown(
            base_price=base,
            supervisor_count=supervisor_count,
            chargeable_supervisors=chargeable,
            price_per_supervisor=per_supervisor,
            supervisor_total=supervisor_total,
            total=base + supervisor_total,
        )
