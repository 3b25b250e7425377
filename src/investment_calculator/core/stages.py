"""Calculation stages for interactive front-ends.

A session moves strictly forward through

    IDLE → INFO_COLLECTED → PLAN_COLLECTED → COMPUTED

and can be reset to IDLE at any point. The projection engine knows nothing
about stages; the caller owns the session.
"""

from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Optional

from .contact import ContactInfo, validate_contact
from .exceptions import StageError
from .locale import ValidationReport
from .models import ProjectionResult
from .projection import ProjectionEngine


class CalculationStage(str, Enum):
    IDLE = "idle"
    INFO_COLLECTED = "info_collected"
    PLAN_COLLECTED = "plan_collected"
    COMPUTED = "computed"


@dataclass
class CalculationSession:
    stage: CalculationStage = CalculationStage.IDLE
    contact: Optional[ContactInfo] = None
    plan_report: Optional[ValidationReport] = None
    result: Optional[ProjectionResult] = None

    def _require(self, expected: CalculationStage) -> None:
        if self.stage != expected:
            raise StageError(f"Expected stage {expected.value}, session is at {self.stage.value}")

    def collect_info(self, contact: ContactInfo) -> ValidationReport:
        """Store contact details; the stage only advances when they are valid."""
        self._require(CalculationStage.IDLE)
        report = validate_contact(contact)
        if report.ok:
            self.contact = contact
            self.stage = CalculationStage.INFO_COLLECTED
        return report

    def collect_plan(self, report: ValidationReport) -> ValidationReport:
        self._require(CalculationStage.INFO_COLLECTED)
        if report.ok:
            self.plan_report = report
            self.stage = CalculationStage.PLAN_COLLECTED
        return report

    def compute(self, engine: ProjectionEngine, today: Optional[date] = None) -> ProjectionResult:
        self._require(CalculationStage.PLAN_COLLECTED)
        plan, rate_spec, duration, tax_policy = self.plan_report.entities()
        self.result = engine.project(plan, rate_spec, duration, tax_policy, today=today)
        self.stage = CalculationStage.COMPUTED
        return self.result

    def reset(self) -> None:
        self.stage = CalculationStage.IDLE
        self.contact = None
        self.plan_report = None
        self.result = None
