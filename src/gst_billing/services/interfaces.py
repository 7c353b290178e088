from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Mapping

from gst_billing.domain.documents import DocumentCalculation, DocumentInput
from gst_billing.domain.value_objects import DocumentType


@dataclass(frozen=True)
class SnapshotDrift:
    """A stored document field that no longer matches its recomputed value."""

    field: str
    stored: Decimal
    recomputed: Decimal

    @property
    def difference(self) -> Decimal:
        return self.recomputed - self.stored


class DocumentCalculationService(ABC):
    @abstractmethod
    def calculate(self, document: DocumentInput) -> DocumentCalculation:
        pass

    @abstractmethod
    def to_payload(self, calculation: DocumentCalculation) -> dict[str, Any]:
        pass

    @abstractmethod
    def calculate_payload(
        self,
        payload: Mapping[str, Any],
        document_type: DocumentType | str | None = None,
    ) -> dict[str, Any]:
        pass

    @abstractmethod
    def check_snapshot(
        self,
        payload: Mapping[str, Any],
        document_type: DocumentType | str | None = None,
        tolerance: Decimal | None = None,
    ) -> list[SnapshotDrift]:
        pass
