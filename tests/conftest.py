"""Shared fixtures for catu tests.

Provides a recording comparison capability for observing which rules the
runner consults, and a loader for the YAML conformance fixtures under
tests/fixtures/.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import pytest
import yaml

from catu import STANDARD_MATCH_LABELS, MatchLabels, UriClaim, standard_catalog

FIXTURE_DIR = Path(__file__).resolve().parent / "fixtures"


@dataclass
class RecordingCapability:
    """Delegates to the standard catalog and records every call."""

    labels: MatchLabels = STANDARD_MATCH_LABELS
    calls: list[tuple[str, int, Any]] = field(default_factory=list)
    validations: list[tuple[int, Any]] = field(default_factory=list)
    fail_with: Exception | None = None

    def __post_init__(self) -> None:
        self._catalog = standard_catalog()

    def validate(self, match_type: int, match_value: Any, /) -> bool:
        self.validations.append((match_type, match_value))
        return self._catalog.validate(match_type, match_value)

    async def compare(self, value: str, match_type: int, match_value: Any, /) -> bool:
        self.calls.append((value, match_type, match_value))
        if self.fail_with is not None:
            raise self.fail_with
        return await self._catalog.compare(value, match_type, match_value)


@pytest.fixture
def recorder() -> RecordingCapability:
    return RecordingCapability()


# ─── YAML conformance fixtures ──────────────────────────────────────────────


@dataclass
class ClaimCase:
    """A single URI check from a conformance fixture."""

    fixture_name: str
    case_name: str
    claim: UriClaim
    uri: str
    expect: bool


def load_claim_cases() -> list[ClaimCase]:
    """Load every case from every YAML fixture file."""
    cases: list[ClaimCase] = []
    for path in sorted(FIXTURE_DIR.glob("*.yaml")):
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
        for fixture in data["fixtures"]:
            claim = UriClaim.from_dict(fixture["claim"])
            for case in fixture["cases"]:
                cases.append(
                    ClaimCase(
                        fixture_name=fixture["name"],
                        case_name=case["name"],
                        claim=claim,
                        uri=case["uri"],
                        expect=case["expect"],
                    )
                )
    return cases
