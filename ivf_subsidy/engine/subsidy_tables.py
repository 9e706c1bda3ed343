# ivf_subsidy/engine/subsidy_tables.py
from __future__ import annotations

from .records import TreatmentStage

LEGACY = "2.0"
CURRENT = "3.0"
SCHEMES = (LEGACY, CURRENT)

# age bands (age already < 45 when these are consulted)
BAND_UNDER_40 = "UNDER_40"
BAND_40_TO_44 = "40_TO_44"

# cycle tiers; the legacy scheme only distinguishes FIRST vs the rest
CYCLE_FIRST = "FIRST"
CYCLE_2_TO_3 = "2_TO_3"
CYCLE_4_PLUS = "4_PLUS"

GENERAL = "GENERAL"
LOW_INCOME = "LOW_INCOME"

FULL = TreatmentStage.FULL_CYCLE
RETRIEVAL = TreatmentStage.RETRIEVAL_ONLY
TRANSFER = TreatmentStage.TRANSFER_ONLY


def _legacy_two_tier(first: int, rest: int) -> dict:
    return {CYCLE_FIRST: first, CYCLE_2_TO_3: rest, CYCLE_4_PLUS: rest}


def _flat(amount: int) -> dict:
    return {
        band: {CYCLE_FIRST: amount, CYCLE_2_TO_3: amount, CYCLE_4_PLUS: amount}
        for band in (BAND_UNDER_40, BAND_40_TO_44)
    }


# income tier -> stage -> scheme -> age band -> cycle tier -> amount (NTD)
# amounts are config, not code
SUBSIDY_TABLE = {
    LOW_INCOME: {
        FULL: {LEGACY: _flat(150_000), CURRENT: _flat(150_000)},
        RETRIEVAL: {LEGACY: _flat(90_000), CURRENT: _flat(100_000)},
        TRANSFER: {LEGACY: _flat(60_000), CURRENT: _flat(60_000)},
    },
    GENERAL: {
        FULL: {
            LEGACY: {
                BAND_UNDER_40: _legacy_two_tier(100_000, 60_000),
                BAND_40_TO_44: _legacy_two_tier(100_000, 60_000),
            },
            CURRENT: {
                BAND_UNDER_40: {CYCLE_FIRST: 150_000, CYCLE_2_TO_3: 100_000, CYCLE_4_PLUS: 60_000},
                BAND_40_TO_44: {CYCLE_FIRST: 150_000, CYCLE_2_TO_3: 100_000, CYCLE_4_PLUS: 60_000},
            },
        },
        RETRIEVAL: {
            LEGACY: {
                BAND_UNDER_40: _legacy_two_tier(70_000, 40_000),
                BAND_40_TO_44: _legacy_two_tier(70_000, 40_000),
            },
            CURRENT: {
                BAND_UNDER_40: {CYCLE_FIRST: 100_000, CYCLE_2_TO_3: 70_000, CYCLE_4_PLUS: 40_000},
                # 2-3 and 4+ share 40k; 4+ is unreachable under the 3-cycle cap
                BAND_40_TO_44: {CYCLE_FIRST: 100_000, CYCLE_2_TO_3: 40_000, CYCLE_4_PLUS: 40_000},
            },
        },
        TRANSFER: {
            LEGACY: {
                BAND_UNDER_40: _legacy_two_tier(30_000, 20_000),
                BAND_40_TO_44: _legacy_two_tier(30_000, 20_000),
            },
            CURRENT: {
                BAND_UNDER_40: {CYCLE_FIRST: 50_000, CYCLE_2_TO_3: 30_000, CYCLE_4_PLUS: 20_000},
                BAND_40_TO_44: {CYCLE_FIRST: 50_000, CYCLE_2_TO_3: 30_000, CYCLE_4_PLUS: 20_000},
            },
        },
    },
}


def income_tier(is_low_income: bool) -> str:
    return LOW_INCOME if is_low_income else GENERAL


def age_band(age: int) -> str:
    return BAND_UNDER_40 if age <= 39 else BAND_40_TO_44


def cycle_tier(treatment_count: int) -> str:
    if treatment_count <= 1:
        return CYCLE_FIRST
    if treatment_count <= 3:
        return CYCLE_2_TO_3
    return CYCLE_4_PLUS


def lookup_amount(
    scheme: str,
    is_low_income: bool,
    stage: TreatmentStage,
    age: int,
    treatment_count: int,
) -> int:
    """
    Single table lookup for one scheme. Raises KeyError for an unknown scheme;
    stage is a closed enum so it always resolves.
    """
    by_stage = SUBSIDY_TABLE[income_tier(is_low_income)][TreatmentStage(stage)]
    return by_stage[scheme][age_band(age)][cycle_tier(treatment_count)]
