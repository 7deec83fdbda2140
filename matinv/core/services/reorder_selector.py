"""
Reorder selection and reporting.

Picks the materials that need replenishing and assembles the reorder
report and dashboard counts from persisted materials. Results are
recomputed on every call.
"""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from datetime import UTC, datetime

from matinv.core.entities.material import Material, StockStatus
from matinv.core.entities.supplier import Supplier
from matinv.core.services.stock_status import (
    days_until_shortage,
    describe_days_until_shortage,
    material_recommended_order_quantity,
)

REORDER_STATUSES = frozenset({StockStatus.CRITICAL, StockStatus.LOW})


@dataclass
class ReorderLine:
    """One material on the reorder report."""

    material: Material
    recommended_order_qty: int
    days_until_shortage: int | None
    days_until_shortage_label: str
    urgent: bool
    supplier_name: str | None = None
    supplier_email: str | None = None


@dataclass
class ReorderReport:
    """Materials needing replenishment, most severe first."""

    generated_at: datetime
    lines: list[ReorderLine] = field(default_factory=list)

    @property
    def critical_count(self) -> int:
        return sum(1 for line in self.lines if line.material.status == StockStatus.CRITICAL)

    @property
    def low_count(self) -> int:
        return sum(1 for line in self.lines if line.material.status == StockStatus.LOW)


@dataclass
class StockLevelSummary:
    """Material counts per stock status."""

    total: int = 0
    critical: int = 0
    low: int = 0
    safe: int = 0


def select_for_reorder(materials: Iterable[Material]) -> list[Material]:
    """Critical and low materials, critical first, then by material code."""
    selected = [m for m in materials if m.status in REORDER_STATUSES]
    return sorted(selected, key=lambda m: (m.status.severity, m.material_code))


def build_reorder_report(
    materials: Iterable[Material],
    suppliers: Mapping[str, Supplier] | None = None,
    now: datetime | None = None,
) -> ReorderReport:
    """
    Build the reorder report.

    Args:
        materials: Candidate materials; anything not critical or low is skipped.
        suppliers: Suppliers by id, used to fill in contact details.
        now: Reference time for days-until-shortage.
    """
    now = now or datetime.now(UTC)
    suppliers = suppliers or {}
    report = ReorderReport(generated_at=now)

    for material in select_for_reorder(materials):
        days = days_until_shortage(material.shortage_date, now)
        supplier = suppliers.get(material.supplier_id) if material.supplier_id else None
        report.lines.append(
            ReorderLine(
                material=material,
                recommended_order_qty=material_recommended_order_quantity(material),
                days_until_shortage=days,
                days_until_shortage_label=describe_days_until_shortage(days),
                urgent=days is not None and days <= material.lead_time_days,
                supplier_name=supplier.name if supplier else None,
                supplier_email=supplier.email if supplier else None,
            )
        )

    return report


def summarize_stock_levels(materials: Iterable[Material]) -> StockLevelSummary:
    """Count materials per status."""
    summary = StockLevelSummary()
    for material in materials:
        summary.total += 1
        if material.status == StockStatus.CRITICAL:
            summary.critical += 1
        elif material.status == StockStatus.LOW:
            summary.low += 1
        else:
            summary.safe += 1
    return summary
