import numpy as np
import pandas as pd
from joblib import Parallel, delayed

from . import aggregate
from ..configuration import config_value
from ..data.table import query_frame
from ..exceptions import InvalidConfiguration, DegenerateSample, ExhaustedRetries
from ..learn.oracle import TreeOracle
from ..sampling.resampler import Resampler
from ..util import as_random_state, MAX_INT
from ..util.loggers import get_module_logger, TimingLog, INFO

_logger = get_module_logger(__name__)

POLICIES = ('raise', 'redraw')


def _quantiles(low, high):
	default_low, default_high = config_value('interval')
	return (
		default_low if low is None else low,
		default_high if high is None else high,
	)


class EnsembleResult:
	"""
	The ordered positive-class probabilities from one ensemble run.

	Attributes:
		probabilities (numpy.ndarray): Read-only, one value per round,
			in round order.
		seeds (numpy.ndarray): Read-only, the seed used by each round.
	"""

	def __init__(self, probabilities, seeds=None):
		probabilities = np.array(probabilities, dtype=np.float64)
		probabilities.setflags(write=False)
		self.probabilities = probabilities
		if seeds is not None:
			seeds = np.array(seeds)
			seeds.setflags(write=False)
		self.seeds = seeds

	def __repr__(self):
		return f"<treebag.EnsembleResult {len(self)} rounds, mean {self.mean():.4f}>"

	def __len__(self):
		return len(self.probabilities)

	def __iter__(self):
		return iter(self.probabilities)

	def __getitem__(self, item):
		return self.probabilities[item]

	def __array__(self, dtype=None, copy=None):
		return np.array(self.probabilities, dtype=dtype)

	def mean(self):
		return aggregate.point_estimate(self.probabilities)

	def consensus(self, baseline):
		return aggregate.consensus(self.probabilities, baseline)

	def interval(self, quantile_low=None, quantile_high=None):
		return aggregate.interval(self.probabilities, *_quantiles(quantile_low, quantile_high))

	def summarize(self, baseline, quantile_low=None, quantile_high=None):
		return aggregate.summarize(
			self.probabilities, baseline, *_quantiles(quantile_low, quantile_high),
		)

	def to_series(self, name='probability'):
		s = pd.Series(self.probabilities, name=name)
		s.index.name = 'round'
		return s


def resolve_subset_size(subset_size, n_features):
	"""
	Turn a subset size setting into a column count.

	Args:
		subset_size (int or 'sqrt'): A count, or 'sqrt' for
			`max(1, int(sqrt(n_features)))`.
		n_features (int): The number of available feature columns.

	Returns:
		int
	"""
	if isinstance(subset_size, str) and subset_size == 'sqrt':
		return max(1, int(np.sqrt(n_features)))
	if isinstance(subset_size, (bool, np.bool_)) or not isinstance(subset_size, (int, np.integer)):
		raise InvalidConfiguration(f"subset size must be an int or 'sqrt', not {subset_size!r}")
	return int(subset_size)


def _one_round(table, query, subset_size, oracle, seed, on_degenerate, max_retries):
	random_state = np.random.RandomState(seed)
	resampler = Resampler(random_state)
	attempt = 0
	while True:
		attempt += 1
		rows, columns = resampler.draw(table.n_rows, table.features, subset_size)
		sample = table.restrict(rows, columns)
		tree_seed = random_state.randint(MAX_INT)
		try:
			model = oracle.fit(sample, random_state=tree_seed)
		except DegenerateSample as err:
			if on_degenerate == 'raise':
				raise
			if attempt > max_retries:
				raise ExhaustedRetries(
					f"no usable sample after {attempt} attempts",
					attempts=attempt,
				) from err
			_logger.warning(f"degenerate sample on attempt {attempt}, redrawing")
			continue
		return model.predict_proba(query)


class EnsembleDriver:
	"""
	Bootstrap-aggregated probability estimator with feature subsampling.

	Each round draws a bootstrap row sample and an independent feature
	subset, fits one tree through the oracle on that restriction, and
	keeps the tree's positive-class probability for the query record.

	Args:
		rounds (int, optional): Number of rounds.  Defaults to the
			configured 'rounds'.
		subset_size (int or 'sqrt', optional): Feature columns per
			round.  Defaults to the configured 'subset_size'.
		oracle (TreeOracle, optional): Fits one tree per round.
		n_jobs (int, optional): Rounds are dispatched with
			`joblib.Parallel(n_jobs=n_jobs)`; None runs them in
			sequence.
		on_degenerate ({'raise', 'redraw'}, optional): What to do
			when a round draws a sample the oracle cannot fit.
			'raise' propagates the DegenerateSample, aborting the
			ensemble.  'redraw' draws again, up to `max_retries`
			times, then raises ExhaustedRetries.
		max_retries (int, optional): Redraw budget per round.
	"""

	def __init__(
			self,
			rounds=None,
			subset_size=None,
			oracle=None,
			n_jobs=None,
			on_degenerate=None,
			max_retries=None,
	):
		self.rounds = config_value('rounds') if rounds is None else rounds
		self.subset_size = config_value('subset_size') if subset_size is None else subset_size
		self.oracle = TreeOracle() if oracle is None else oracle
		self.n_jobs = config_value('n_jobs') if n_jobs is None else n_jobs
		self.on_degenerate = config_value('on_degenerate') if on_degenerate is None else on_degenerate
		self.max_retries = config_value('max_retries') if max_retries is None else max_retries

	def _validate(self, table, query):
		if isinstance(self.rounds, (bool, np.bool_)) or not isinstance(self.rounds, (int, np.integer)):
			raise InvalidConfiguration(f"rounds must be an int, not {self.rounds!r}")
		if self.rounds <= 0:
			raise InvalidConfiguration(f"rounds must be positive, not {self.rounds}")
		if self.on_degenerate not in POLICIES:
			raise InvalidConfiguration(
				f"on_degenerate must be one of {POLICIES}, not {self.on_degenerate!r}"
			)
		if self.max_retries < 0:
			raise InvalidConfiguration(f"max_retries cannot be negative, not {self.max_retries}")
		if table.n_rows == 0:
			raise InvalidConfiguration("the training table is empty")
		m = resolve_subset_size(self.subset_size, table.n_features)
		if m < 1 or m > table.n_features:
			raise InvalidConfiguration(
				f"subset size {m} is outside 1..{table.n_features}"
			)
		# fail early on a query that lacks features
		query_frame(query, table.features)
		return m

	def run(self, table, query, random_state=None):
		"""
		Run every round against one query record.

		Args:
			table (TrainingTable): Shared, read-only training data.
			query (Mapping or pandas.Series): The record to score.
			random_state (None, int, or numpy.random.RandomState):
				The root random source; per-round seeds are drawn
				from it before any round runs.

		Returns:
			EnsembleResult

		Raises:
			InvalidConfiguration: Before any round runs, if a
				setting or input is unusable.
			DegenerateSample: Under the 'raise' policy, from the
				first round that cannot be fit.
			ExhaustedRetries: Under the 'redraw' policy, from a
				round that spent its retry budget.
		"""
		m = self._validate(table, query)
		seeds = as_random_state(random_state).randint(MAX_INT, size=self.rounds)
		_logger.info(
			f"running {self.rounds} rounds, {m} of {table.n_features} features, "
			f"{table.n_rows} rows"
		)
		with TimingLog(f"ensemble of {self.rounds} rounds", log=_logger, level=INFO):
			if self.n_jobs is None or self.n_jobs == 1:
				probabilities = []
				for i, seed in enumerate(seeds):
					p = _one_round(
						table, query, m, self.oracle, seed,
						self.on_degenerate, self.max_retries,
					)
					_logger.debug(f"round {i}: {p:.6f}")
					probabilities.append(p)
			else:
				probabilities = Parallel(n_jobs=self.n_jobs)(
					delayed(_one_round)(
						table, query, m, self.oracle, seed,
						self.on_degenerate, self.max_retries,
					)
					for seed in seeds
				)
				for i, p in enumerate(probabilities):
					_logger.debug(f"round {i}: {p:.6f}")
		return EnsembleResult(probabilities, seeds)


def run_ensemble(
		table,
		query,
		rounds=None,
		subset_size=None,
		oracle=None,
		random_state=None,
		**kwargs,
):
	"""
	Run a bootstrap ensemble for one query record.

	A functional front end for `EnsembleDriver`; extra keyword arguments
	(`n_jobs`, `on_degenerate`, `max_retries`) go to the driver.

	Returns:
		EnsembleResult
	"""
	driver = EnsembleDriver(
		rounds=rounds,
		subset_size=subset_size,
		oracle=oracle,
		**kwargs,
	)
	return driver.run(table, query, random_state=random_state)
