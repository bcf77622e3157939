from abc import ABC, abstractmethod

from app.domain.entities.wizard_session import WizardSession


class DraftStorePort(ABC):
    @abstractmethod
    def get(self, session_id: str) -> WizardSession | None:
        """Return the session, or None when missing or expired."""
        raise NotImplementedError

    @abstractmethod
    def put(self, session: WizardSession) -> None:
        raise NotImplementedError

    @abstractmethod
    def delete(self, session_id: str) -> None:
        raise NotImplementedError

    @abstractmethod
    def purge_expired(self) -> int:
        """Discard every expired draft and return how many were removed."""
        raise NotImplementedError
