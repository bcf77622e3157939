import logging

from fastapi import FastAPI

from app.api.v1.students import router as students_router
from app.api.v1.wizard import router as wizard_router
from app.core.config import settings

class ContextFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        extras = []
        for key in ("wizard_id", "step", "role", "booking_id", "reason"):
            value = getattr(record, key, None)
            if value not in (None, ""):
                extras.append(f"{key}={value}")
        base = super().format(record)
        if extras:
            return f"{base} | " + " ".join(extras)
        return base


handler = logging.StreamHandler()
handler.setFormatter(ContextFormatter("%(levelname)s:%(name)s:%(message)s"))

root = logging.getLogger()
root.setLevel(getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO))
root.handlers.clear()
root.addHandler(handler)

logging.getLogger(__name__).info(
    "Booking wizard configured",
    extra={
        "reason": (
            f"env={settings.ENV} backend={settings.BACKEND_BASE_URL or 'local'} "
            f"supervisor_pricing={settings.SUPERVISOR_PRICING_RULE} draft_ttl={settings.DRAFT_TTL_MINUTES}m"
        )
    },
)

app = FastAPI(title="Bokningshubben Booking Wizard", version="1.0.0")

app.include_router(wizard_router, prefix="/api/v1/wizard", tags=["wizard"])
app.include_router(students_router, prefix="/api/v1/students", tags=["students"])


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok", "env": settings.ENV}
