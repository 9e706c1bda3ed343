# ivf_subsidy/engine/__init__.py
from .records import ApplicantRecord, EvaluationResult, InvalidApplicantRecord, TreatmentStage
from .rules import compute_age, evaluate, max_cycles, transfer_limit
from .scheme_selection import active_scheme, scheme_advice
from .history import HistoryEntry, HistoryStore, InMemoryHistoryStore
