#

__version__ = '0.1.0'


import logging


_currently_captured = (logging._warnings_showwarning is not None)
logging.captureWarnings(True)

try:

	from .configuration import config, config_value
	from .exceptions import *
	from .data.table import TrainingTable, RestrictedTable
	from .sampling.resampler import Resampler
	from .learn.oracle import TreeOracle, FittedTree
	from .learn.library import forest_probability, single_tree_probability
	from .ensemble.driver import EnsembleDriver, EnsembleResult, run_ensemble
	from .ensemble.aggregate import point_estimate, consensus, interval, summarize, Estimate
	from .util.loggers import log_to_stderr

finally:
	logging.captureWarnings(_currently_captured)

def package_file(*args):
	"""Return the filename of a file within this package."""
	import os
	return os.path.join(
		os.path.dirname(__file__),
		*args
	)
