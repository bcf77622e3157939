import logging

from app.core.config import settings
from app.application.ports.booking_gateway import BookingGatewayPort
from app.application.ports.catalog import CatalogPort
from app.application.ports.draft_store import DraftStorePort
from app.application.ports.student_directory import StudentDirectoryPort
from app.application.use_cases.booking_wizard import BookingWizardUseCase
from app.application.use_cases.catalog_loader import CatalogLoaderUseCase
from app.application.use_cases.confirm_booking import ConfirmBookingUseCase
from app.application.use_cases.eligibility import EligibilityChecker
from app.application.use_cases.pricing import PricingCalculator, SupervisorPricingRule
from app.application.use_cases.student_lookup import StudentLookupUseCase
from app.infrastructure.booking.http_booking_gateway import HttpBookingGateway
from app.infrastructure.booking.mock_booking_gateway import MockBookingGateway
from app.infrastructure.catalog.http_catalog import HttpCatalog
from app.infrastructure.catalog.seed_data import STUDENTS
from app.infrastructure.catalog.static_catalog import StaticCatalog
from app.infrastructure.store.json_store import JsonDraftStore
from app.infrastructure.store.memory_store import MemoryDraftStore
from app.infrastructure.students.http_directory import HttpStudentDirectory
from app.infrastructure.students.memory_directory import MemoryStudentDirectory


logger = logging.getLogger(__name__)

_draft_store: DraftStorePort | None = None
_catalog: CatalogPort | None = None
_booking_gateway: BookingGatewayPort | None = None
_student_directory: StudentDirectoryPort | None = None


def _use_backend() -> bool:
    return bool(settings.BACKEND_BASE_URL) and settings.ENV.lower() not in {"dev", "local"}


def get_draft_store() -> DraftStorePort:
    global _draft_store
    if _draft_store is None:
        if settings.ENV.lower() in {"dev", "local"}:
            _draft_store = JsonDraftStore(data_dir=settings.DRAFT_STORE_DIR, ttl_minutes=settings.DRAFT_TTL_MINUTES)
        else:
            _draft_store = MemoryDraftStore(ttl_minutes=settings.DRAFT_TTL_MINUTES)
    return _draft_store


def get_catalog() -> CatalogPort:
    global _catalog
    if _catalog is None:
        _catalog = HttpCatalog() if _use_backend() else StaticCatalog()
    return _catalog


def get_booking_gateway() -> BookingGatewayPort:
    global _booking_gateway
    if _booking_gateway is None:
        if _use_backend():
            _booking_gateway = HttpBookingGateway()
        else:
            logger.info("Using MockBookingGateway (ENV=%s, backend configured=%s)", settings.ENV, bool(settings.BACKEND_BASE_URL))
            _booking_gateway = MockBookingGateway()
    return _booking_gateway


def get_student_directory() -> StudentDirectoryPort:
    global _student_directory
    if _student_directory is None:
        if _use_backend():
            _student_directory = HttpStudentDirectory()
        else:
            _student_directory = MemoryStudentDirectory(STUDENTS)
    return _student_directory


def get_pricing() -> PricingCalculator:
    return PricingCalculator(rule=SupervisorPricingRule(settings.SUPERVISOR_PRICING_RULE))


def get_eligibility() -> EligibilityChecker:
    return EligibilityChecker(
        max_supervisors=settings.MAX_SUPERVISORS,
        personal_number_required=settings.SUPERVISOR_PERSONAL_NUMBER_REQUIRED,
    )


def get_student_lookup_use_case() -> StudentLookupUseCase:
    return StudentLookupUseCase(directory=get_student_directory())


def get_booking_wizard_use_case() -> BookingWizardUseCase:
    pricing = get_pricing()
    eligibility = get_eligibility()
    return BookingWizardUseCase(
        store=get_draft_store(),
        catalog_loader=CatalogLoaderUseCase(catalog=get_catalog()),
        student_lookup=get_student_lookup_use_case(),
        pricing=pricing,
        eligibility=eligibility,
        confirm_booking=ConfirmBookingUseCase(
            gateway=get_booking_gateway(),
            pricing=pricing,
            eligibility=eligibility,
            payment_method=settings.DEFAULT_PAYMENT_METHOD,
            payment_hub_url=settings.PAYMENT_HUB_URL,
        ),
    )
