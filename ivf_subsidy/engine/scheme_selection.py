# ivf_subsidy/engine/scheme_selection.py

from dataclasses import dataclass
from datetime import date
from typing import Optional

from .subsidy_tables import CURRENT, LEGACY

DEFAULT_CUTOVER = date(2023, 7, 1)


@dataclass
class SchemeAdvice:
    """
    Presentation hint attached next to an evaluation:

    - active_scheme: "3.0" when the first application is on/after the cutover,
      otherwise "2.0".
    - note: short human-readable line explaining which amount applies.

    Never changes the computed amounts; both are always returned.
    """
    active_scheme: str
    note: Optional[str] = None


def active_scheme(first_application_date: date, cutover: date = DEFAULT_CUTOVER) -> str:
    return CURRENT if first_application_date >= cutover else LEGACY


def scheme_advice(first_application_date: date, cutover: date = DEFAULT_CUTOVER) -> SchemeAdvice:
    scheme = active_scheme(first_application_date, cutover)
    if scheme == CURRENT:
        note = (
            f"First application on or after {cutover.isoformat()}: "
            f"the {CURRENT} scheme amount applies."
        )
    else:
        note = (
            f"First application before {cutover.isoformat()}: "
            f"the {LEGACY} scheme amount applies; the {CURRENT} figure is for comparison."
        )
    return SchemeAdvice(active_scheme=scheme, note=note)
