"""Bundled read-only datasets: tax brackets, eligible funds, grants, ZIP incomes.

The calculators never load these themselves; callers (the API layer, scripts,
tests) pass the parsed data in. Files are read once and cached.
"""

from __future__ import annotations

import json
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, List

from pydantic import BaseModel, ConfigDict

from trumpaccount.models import TaxBracket

DATA_DIR = Path(__file__).resolve().parent.parent / "data"


class Fund(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    ticker: str
    name: str
    expenseRatio: float
    provider: str
    index: str


class GrantEligibility(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    maxMedianIncome: float
    maxAge: int
    maxAgeLabel: str
    requiresCitizenship: bool


class Grant(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    id: str
    name: str
    organization: str
    amount: float
    amountLabel: str
    description: str
    eligibility: GrantEligibility
    source: str
    announcedDate: str
    notes: str


def _load_json(name: str) -> Any:
    with open(DATA_DIR / name, "r", encoding="utf-8") as f:
        return json.load(f)


@lru_cache(maxsize=None)
def _tax_tables() -> Dict[str, Any]:
    return _load_json("tax_brackets.json")


def filing_statuses() -> List[str]:
    return [key for key in _tax_tables() if key != "taxYear"]


def load_tax_brackets(filing_status: str = "single") -> List[TaxBracket]:
    """Progressive schedule for a filing status; KeyError if unknown."""
    rows = _tax_tables()[filing_status]
    return [TaxBracket.model_validate(row) for row in rows]


@lru_cache(maxsize=None)
def load_funds() -> List[Fund]:
    return [Fund.model_validate(row) for row in _load_json("funds.json")["eligibleFunds"]]


@lru_cache(maxsize=None)
def _grants_file() -> Dict[str, Any]:
    return _load_json("grants.json")


def load_grants() -> List[Grant]:
    return [Grant.model_validate(row) for row in _grants_file()["grants"]]


def grants_data_source() -> str:
    """Census attribution shown next to grant results."""
    return _grants_file()["dataSource"]


@lru_cache(maxsize=None)
def load_zip_incomes() -> Dict[str, float]:
    return {zip_code: float(income) for zip_code, income in _load_json("zip_median_income.json").items()}
