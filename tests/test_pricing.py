"""
Tests for price calculation.
"""

from __future__ import annotations

from dataclasses import replace
from decimal import Decimal

import pytest

from app.application.use_cases.pricing import PricingCalculator, SupervisorPricingRule
from app.domain.entities.booking_draft import BookingDraft, LessonDraft, TeoriDraft
from app.domain.entities.participants import Role


def test_student_gets_student_price(lesson_type):
    """A student booking a lesson with a student price pays it and sees the difference as discount."""
    price = PricingCalculator().calculate(BookingDraft(selection=LessonDraft(lesson_type=lesson_type)), Role.student)

    assert price.base_price == Decimal("500")
    assert price.total == Decimal("400")
    assert price.discount == Decimal("100")


@pytest.mark.parametrize("role", [None, Role.teacher, Role.admin])
def test_non_students_pay_full_price(lesson_type, role):
    price = PricingCalculator().calculate(BookingDraft(selection=LessonDraft(lesson_type=lesson_type)), role)
    assert price.total == Decimal("500")
    assert price.discount == Decimal(0)


def test_student_price_equal_to_price_gives_no_discount(lesson_type):
    same = replace(lesson_type, price_student=lesson_type.price)
    price = PricingCalculator().calculate(BookingDraft(selection=LessonDraft(lesson_type=same)), Role.student)
    assert price.discount == Decimal(0)
    assert price.total == Decimal("500")


def test_every_supervisor_charged_by_default(handledarkurs, open_session, supervisors):
    """300 base plus 2 x 100 per supervisor."""
    draft = BookingDraft(
        selection=TeoriDraft(lesson_type=handledarkurs, session=open_session),
        supervisors=tuple(supervisors),
    )
    price = PricingCalculator().calculate(draft, None)

    assert price.base_price == Decimal("300")
    assert price.supervisor_count == 2
    assert price.chargeable_supervisors == 2
    assert price.supervisor_total == Decimal("200")
    assert price.total == Decimal("500")


def test_first_supervisor_free_rule(handledarkurs, open_session, supervisors):
    draft = BookingDraft(
        selection=TeoriDraft(lesson_type=handledarkurs, session=open_session),
        supervisors=tuple(supervisors),
    )
    price = PricingCalculator(rule=SupervisorPricingRule.first_free).calculate(draft, None)

    assert price.chargeable_supervisors == 1
    assert price.total == Decimal("400")


def test_rule_accepts_plain_string():
    assert PricingCalculator(rule="first_free").chargeable_supervisors(2) == 1
    with pytest.raises(ValueError):
        PricingCalculator(rule="half_price")


def test_session_supervisor_price_used_when_type_has_none(handledarkurs, open_session, supervisors):
    no_type_price = replace(handledarkurs, price_per_supervisor=None)
    session = replace(open_session, price_per_supervisor=Decimal("150"))
    draft = BookingDraft(
        selection=TeoriDraft(lesson_type=no_type_price, session=session),
        supervisors=tuple(supervisors[:1]),
    )
    assert PricingCalculator().calculate(draft, None).total == Decimal("450")


def test_theory_price_without_supervisors(teorilektion):
    draft = BookingDraft(selection=TeoriDraft(lesson_type=teorilektion, session=teorilektion.sessions[0]))
    price = PricingCalculator().calculate(draft, Role.student)
    assert price.total == Decimal("250")
    assert price.supervisor_total == Decimal(0)


def test_nothing_to_price_yet(handledarkurs):
    calculator = PricingCalculator()
    assert calculator.calculate(BookingDraft(), None) is None
    assert calculator.calculate(BookingDraft(selection=TeoriDraft(lesson_type=handledarkurs)), None) is None


def test_pricing_is_idempotent(handledarkurs, open_session, supervisors):
    draft = BookingDraft(
        selection=TeoriDraft(lesson_type=handledarkurs, session=open_session),
        supervisors=tuple(supervisors),
    )
    calculator = PricingCalculator()
    assert calculator.calculate(draft, None) == calculator.calculate(draft, None)
