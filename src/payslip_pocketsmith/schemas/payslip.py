"""
Zedra payslip document schema.

The payslip arrives as a single JSON object (the "interactive payslip"
export) and is parsed once into read-only dataclasses. Amounts are kept as
Decimal; line totals are positive magnitudes and the pay module they belong
to decides their sign.
"""

import json
import logging
import math
from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import Any

from ..errors import MalformedInput

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ModuleLine:
    """Single line of a pay module, e.g. "Basic Salary" or "PAYE Tax"."""

    description: str
    total: Decimal


@dataclass(frozen=True)
class PayModule:
    """One payslip section with its lines in payslip order."""

    amount: Decimal = Decimal("0")
    lines: tuple[ModuleLine, ...] = ()


@dataclass(frozen=True)
class Payslip:
    """
    Parsed payslip (read-only after parsing).

    pay_date is kept as supplied by the source; use to_date_only() to get
    the YYYY-MM-DD form used on transactions.
    """

    pay_date: str
    take_home_pay: Decimal

    gross_pay: PayModule = field(default_factory=PayModule)
    tax_and_ni: PayModule = field(default_factory=PayModule)
    pension: PayModule = field(default_factory=PayModule)
    deduction: PayModule = field(default_factory=PayModule)
    net_deduction: PayModule = field(default_factory=PayModule)
    net_addition: PayModule = field(default_factory=PayModule)
    taxable_benefits: PayModule = field(default_factory=PayModule)

    tax_amount: Decimal = Decimal("0")
    ni_amount: Decimal = Decimal("0")

    @classmethod
    def from_dict(cls, data: dict) -> "Payslip":
        """Build from the decoded Zedra JSON document."""
        if not isinstance(data, dict):
            raise MalformedInput(
                f"Payslip must be a JSON object, got {type(data).__name__}"
            )

        for key in ("payDate", "takeHomePay"):
            if data.get(key) is None:
                raise MalformedInput(f"Payslip is missing required field '{key}'")

        return cls(
            pay_date=str(data["payDate"]),
            take_home_pay=_to_decimal(data["takeHomePay"], "takeHomePay"),
            gross_pay=_parse_module(data, "grossPayModule"),
            tax_and_ni=_parse_module(data, "taxAndNIModule"),
            pension=_parse_module(data, "pensionModule"),
            deduction=_parse_module(data, "deductionModule"),
            net_deduction=_parse_module(data, "netDeductionModule"),
            net_addition=_parse_module(data, "netAdditionModule"),
            taxable_benefits=_parse_module(data, "taxableBenefitsModule"),
            tax_amount=_to_decimal(data.get("taxAmount", 0), "taxAmount"),
            ni_amount=_to_decimal(data.get("niAmount", 0), "niAmount"),
        )


def _to_decimal(value: Any, where: str) -> Decimal:
    # bool is an int subclass; a flag is never a valid amount
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise MalformedInput(f"Expected a number for {where}, got {value!r}")
    amount = Decimal(str(value))
    # Amounts are sent as JSON numbers: no NaN, Infinity or float overflow
    if not amount.is_finite() or math.isinf(float(amount)):
        raise MalformedInput(f"Expected a finite number for {where}, got {value!r}")
    return amount


def _parse_module(data: dict, key: str) -> PayModule:
    raw = data.get(key)
    if raw is None:
        logger.debug(f"Payslip has no {key}, treating it as empty")
        return PayModule()
    if not isinstance(raw, dict):
        raise MalformedInput(f"{key} must be an object, got {type(raw).__name__}")

    lines = []
    for index, line in enumerate(raw.get("moduleLines") or []):
        where = f"{key}.moduleLines[{index}]"
        if not isinstance(line, dict):
            raise MalformedInput(f"{where} must be an object")
        description = line.get("description")
        if not isinstance(description, str) or not description:
            raise MalformedInput(f"{where} has no description")
        lines.append(
            ModuleLine(
                description=description,
                total=_to_decimal(line.get("total"), f"{where}.total"),
            )
        )

    return PayModule(
        amount=_to_decimal(raw.get("amount", 0), f"{key}.amount"),
        lines=tuple(lines),
    )


def load_payslip(raw: str | bytes) -> Payslip:
    """
    Parse a payslip from the raw input payload.

    Raises:
        MalformedInput: If the payload is empty, not JSON, or not a payslip
    """
    if isinstance(raw, bytes):
        raw = raw.decode("utf-8")

    if not raw or not raw.strip():
        raise MalformedInput("No input received")

    try:
        data = json.loads(raw)
    except ValueError as e:
        raise MalformedInput(f"Failed to parse payslip: {e}") from e

    return Payslip.from_dict(data)


def to_date_only(value: str | date) -> str:
    """
    Normalize a pay date to YYYY-MM-DD.

    Accepts a date, an ISO date string, or an ISO datetime string
    ("2024-01-31T00:00:00.000Z"); the time part is discarded.
    """
    if isinstance(value, date):
        return value.isoformat()[:10]

    date_part = str(value).split("T")[0].strip()
    try:
        return date.fromisoformat(date_part).isoformat()
    except ValueError as e:
        raise MalformedInput(f"Invalid date format: {value}") from e
