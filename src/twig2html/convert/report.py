"""Conversion outcomes and the batch report."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Literal, Optional

Status = Literal["success", "failed", "skipped"]

SOURCE_TAG = "📝"
DATA_TAG = "📊"
OUTPUT_TAG = "📄"


@dataclass(frozen=True)
class ConversionOutcome:
    """The result of processing one template during a batch run."""

    status: Status
    relative_path: str
    source_label: str
    data_file: Optional[str] = None
    data_label: Optional[str] = None
    output_file: Optional[str] = None
    output_label: Optional[str] = None
    error: Optional[str] = None

    @property
    def descriptor(self) -> str:
        text = f"{SOURCE_TAG}{self.source_label}/{self.relative_path}"
        if self.status != "success":
            return text
        if self.data_file:
            text += f" + {DATA_TAG}{self.data_label}/{self.data_file}"
        if self.output_file:
            text += f" => {OUTPUT_TAG}{self.output_label}/{self.output_file}"
        return text

    def __str__(self) -> str:
        return self.descriptor


@dataclass
class ConversionReport:
    """Outcomes of a batch run partitioned by status, in processing order."""

    success: List[ConversionOutcome] = field(default_factory=list)
    failed: List[ConversionOutcome] = field(default_factory=list)
    skipped: List[ConversionOutcome] = field(default_factory=list)

    def record(self, outcome: ConversionOutcome) -> None:
        getattr(self, outcome.status).append(outcome)

    @property
    def total(self) -> int:
        return len(self.success) + len(self.failed) + len(self.skipped)

    @property
    def ok(self) -> bool:
        return not self.failed

    def to_dict(self) -> Dict[str, object]:
        return {
            "success": [o.descriptor for o in self.success],
            "failed": [o.descriptor for o in self.failed],
            "skipped": [o.descriptor for o in self.skipped],
            "errors": {o.relative_path: o.error for o in self.failed},
        }
