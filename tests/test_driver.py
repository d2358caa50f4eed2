import logging

import numpy as np
import pandas
import pytest

from treebag import (
	TrainingTable,
	EnsembleDriver,
	EnsembleResult,
	run_ensemble,
	point_estimate,
	InvalidConfiguration,
	DegenerateSample,
	ExhaustedRetries,
)
from treebag.examples import make_spam_like
from treebag.util import MAX_INT


LABELS = np.array([1, 0, 1, 1, 0, 0, 1, 0, 1, 0])


def _small_table(labels=LABELS):
	rs = np.random.RandomState(0)
	df = pandas.DataFrame(rs.uniform(size=(10, 4)), columns=['f0', 'f1', 'f2', 'f3'])
	df['label'] = labels
	return TrainingTable(df, label='label', positive=1)


QUERY = {'f0': 0.5, 'f1': 0.5, 'f2': 0.5, 'f3': 0.5}


class _Constant:

	def __init__(self, value):
		self.value = value

	def predict_proba(self, record):
		return self.value


class ShareOracle:
	"""Scores every record by the positive share of the sampled labels."""

	def fit(self, sample, random_state=None):
		return _Constant(float((sample.y == sample.positive).mean()))


class FlakyOracle(ShareOracle):
	"""Fails with a degenerate sample for the first few fits."""

	def __init__(self, failures):
		self.failures = failures
		self.calls = 0

	def fit(self, sample, random_state=None):
		self.calls += 1
		if self.calls <= self.failures:
			raise DegenerateSample("flaky")
		return super().fit(sample, random_state)


def test_round_draw_order():
	table = _small_table()
	result = run_ensemble(
		table, QUERY, rounds=3, subset_size=2,
		oracle=ShareOracle(), random_state=42,
	)

	seeds = np.random.RandomState(42).randint(MAX_INT, size=3)
	expected = []
	for seed in seeds:
		rs = np.random.RandomState(seed)
		rows = rs.randint(0, 10, size=10)
		rs.choice(4, size=2, replace=False)
		rs.randint(MAX_INT)
		expected.append(LABELS[rows].mean())

	assert isinstance(result, EnsembleResult)
	assert len(result) == 3
	np.testing.assert_array_equal(result.seeds, seeds)
	np.testing.assert_array_equal(result.probabilities, np.asarray(expected))
	assert result.mean() == pytest.approx(sum(expected) / 3, abs=1e-9)
	assert point_estimate(result) == pytest.approx(np.mean(expected), abs=1e-9)


def test_golden_trees():
	# every feature column separates the classes, so any tree fit on a
	# two-class bootstrap sample sends these records to pure leaves
	f = LABELS.astype(float)
	df = pandas.DataFrame({'f0': f, 'f1': f * 2, 'f2': 1 - f, 'f3': 3 - f})
	df['label'] = LABELS
	table = TrainingTable(df, label='label', positive=1)
	spam_like = {'f0': 1.0, 'f1': 2.0, 'f2': 0.0, 'f3': 2.0}
	ham_like = {'f0': 0.0, 'f1': 0.0, 'f2': 1.0, 'f3': 3.0}
	kw = dict(rounds=3, subset_size=2, random_state=42, on_degenerate='redraw', max_retries=20)

	result = run_ensemble(table, spam_like, **kw)
	np.testing.assert_array_equal(result.probabilities, [1.0, 1.0, 1.0])
	assert point_estimate(result) == pytest.approx(1.0, abs=1e-9)

	result = run_ensemble(table, ham_like, **kw)
	np.testing.assert_array_equal(result.probabilities, [0.0, 0.0, 0.0])
	assert point_estimate(result) == pytest.approx(0.0, abs=1e-9)


def test_reproducible():
	table = make_spam_like(n_rows=200, random_state=1)
	query = table.data.iloc[0]
	r1 = run_ensemble(table, query, rounds=500, subset_size=8, random_state=2024)
	r2 = run_ensemble(table, query, rounds=500, subset_size=8, random_state=2024)
	assert len(r1) == 500
	np.testing.assert_array_equal(r1.probabilities, r2.probabilities)
	r3 = run_ensemble(table, query, rounds=500, subset_size=8, random_state=2025)
	assert not np.array_equal(r1.probabilities, r3.probabilities)


def test_parallel_matches_sequential():
	table = make_spam_like(n_rows=120, random_state=3)
	query = table.data.iloc[5]
	seq = run_ensemble(table, query, rounds=16, subset_size=8, random_state=7)
	par = run_ensemble(table, query, rounds=16, subset_size=8, random_state=7, n_jobs=2)
	np.testing.assert_array_equal(seq.probabilities, par.probabilities)


def test_result_is_read_only():
	result = run_ensemble(
		_small_table(), QUERY, rounds=4, subset_size=2,
		oracle=ShareOracle(), random_state=0,
	)
	with pytest.raises(ValueError):
		result.probabilities[0] = 0.5
	s = result.to_series()
	assert s.index.name == 'round'
	assert len(s) == 4


def test_result_summaries():
	result = EnsembleResult([0.1, 0.5, 0.6, 0.8])
	assert result.mean() == pytest.approx(0.5)
	assert result.consensus(0.4) is True
	lower, upper = result.interval(0.0, 1.0)
	assert (lower, upper) == pytest.approx((0.1, 0.8))
	est = result.summarize(0.55, 0.0, 1.0)
	assert est.consensus is False
	assert est.rounds == 4


def test_invalid_configuration():
	table = _small_table()
	with pytest.raises(InvalidConfiguration):
		run_ensemble(table, QUERY, rounds=0, subset_size=2)
	with pytest.raises(InvalidConfiguration):
		run_ensemble(table, QUERY, rounds=-3, subset_size=2)
	with pytest.raises(InvalidConfiguration):
		run_ensemble(table, QUERY, rounds=3, subset_size=5)
	with pytest.raises(InvalidConfiguration):
		run_ensemble(table, QUERY, rounds=3, subset_size=0)
	with pytest.raises(InvalidConfiguration):
		run_ensemble(table, QUERY, rounds=3, subset_size=2, on_degenerate='ignore')
	with pytest.raises(InvalidConfiguration):
		run_ensemble(table, QUERY, rounds=3, subset_size=2, max_retries=-1)
	with pytest.raises(InvalidConfiguration):
		run_ensemble(table, {'f0': 1.0}, rounds=3, subset_size=2)


def test_invalid_configuration_fails_before_any_round():
	oracle = FlakyOracle(failures=0)
	with pytest.raises(InvalidConfiguration):
		run_ensemble(_small_table(), QUERY, rounds=3, subset_size=9, oracle=oracle)
	assert oracle.calls == 0


def test_degenerate_propagates():
	table = _small_table(labels=np.zeros(10, dtype=int))
	with pytest.raises(DegenerateSample):
		run_ensemble(table, QUERY, rounds=5, subset_size=2, random_state=1)


def test_degenerate_propagates_from_workers():
	table = _small_table(labels=np.zeros(10, dtype=int))
	with pytest.raises(DegenerateSample):
		run_ensemble(table, QUERY, rounds=4, subset_size=2, random_state=1, n_jobs=2)


def test_redraw_recovers():
	oracle = FlakyOracle(failures=2)
	result = run_ensemble(
		_small_table(), QUERY, rounds=3, subset_size=2, oracle=oracle,
		random_state=5, on_degenerate='redraw', max_retries=2,
	)
	assert len(result) == 3
	assert oracle.calls == 5


def test_redraw_exhausted():
	table = _small_table(labels=np.zeros(10, dtype=int))
	with pytest.raises(ExhaustedRetries) as info:
		run_ensemble(
			table, QUERY, rounds=3, subset_size=2, random_state=5,
			on_degenerate='redraw', max_retries=2,
		)
	assert info.value.attempts == 3
	assert isinstance(info.value.__cause__, DegenerateSample)


def test_defaults_from_config(isolated_config):
	isolated_config['rounds'] = 6
	isolated_config['subset_size'] = 3
	driver = EnsembleDriver(oracle=ShareOracle())
	assert driver.rounds == 6
	assert driver.on_degenerate == 'raise'
	result = driver.run(_small_table(), QUERY, random_state=0)
	assert len(result) == 6


def test_sqrt_subset_size():
	table = make_spam_like(n_rows=60, random_state=0)
	oracle = _RecordingOracle()
	run_ensemble(table, table.data.iloc[0], rounds=2, subset_size='sqrt', oracle=oracle, random_state=0)
	assert [len(c) for c in oracle.columns] == [7, 7]


class _RecordingOracle(ShareOracle):

	def __init__(self):
		self.columns = []

	def fit(self, sample, random_state=None):
		self.columns.append(sample.columns)
		return super().fit(sample, random_state)


def test_round_logging_same_in_parallel(caplog):
	table = make_spam_like(n_rows=60, random_state=0)
	query = table.data.iloc[0]
	name = "TREEBAG.treebag.ensemble.driver"
	for n_jobs in (None, 2):
		caplog.clear()
		with caplog.at_level(logging.DEBUG, logger=name):
			result = run_ensemble(table, query, rounds=4, subset_size=3, random_state=1, n_jobs=n_jobs)
		rounds = [r.getMessage() for r in caplog.records if r.getMessage().startswith("round ")]
		assert rounds == [f"round {i}: {p:.6f}" for i, p in enumerate(result)]
