
from .driver import EnsembleDriver, EnsembleResult, run_ensemble
from .aggregate import point_estimate, consensus, interval, summarize, Estimate
