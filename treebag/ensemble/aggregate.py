"""
Reduce per-round probabilities to estimates.

Known limitation: the percentile interval from `interval` is
miscalibrated for this ensemble.  Feature subsampling adds a source of
variance that the empirical quantiles of the round results do not
account for, so the nominal coverage is not reliable.  A calibrated
interval needs a variance correction such as jackknife-after-bootstrap,
which is not provided here.
"""

from collections import namedtuple

import numpy as np

from ..exceptions import InvalidConfiguration

Estimate = namedtuple('Estimate', ['mean', 'consensus', 'lower', 'upper', 'rounds'])


def _as_results(results):
	results = np.asarray(results, dtype=np.float64)
	if results.ndim != 1:
		raise InvalidConfiguration("round results must be one dimensional")
	if results.size == 0:
		raise InvalidConfiguration("no round results to aggregate")
	return results


def point_estimate(results):
	"""
	The mean of the round results.

	Args:
		results (array-like of float): Positive-class probabilities.

	Returns:
		float
	"""
	return float(np.mean(_as_results(results)))


def consensus(results, baseline):
	"""
	Majority vote against a baseline.

	Args:
		results (array-like of float): Positive-class probabilities.
		baseline (float): The marginal positive-class frequency of
			the full training table.

	Returns:
		bool: True if strictly more than half of the results exceed
			`baseline`.  Exactly half is not a majority.
	"""
	results = _as_results(results)
	return bool(np.mean(results > baseline) > 0.5)


def interval(results, quantile_low=0.025, quantile_high=0.975):
	"""
	Percentile bootstrap interval of the round results.

	See the module notes: this interval understates uncertainty for
	feature-subsampled ensembles.

	Args:
		results (array-like of float): Positive-class probabilities.
		quantile_low, quantile_high (float): Quantiles in [0, 1].

	Returns:
		tuple(float, float): Lower and upper bounds.
	"""
	if not (0 <= quantile_low <= quantile_high <= 1):
		raise InvalidConfiguration(
			f"invalid quantiles ({quantile_low}, {quantile_high})"
		)
	lower, upper = np.quantile(_as_results(results), [quantile_low, quantile_high])
	return float(lower), float(upper)


def summarize(results, baseline, quantile_low=0.025, quantile_high=0.975):
	"""Collect mean, consensus and interval into an Estimate."""
	results = _as_results(results)
	lower, upper = interval(results, quantile_low, quantile_high)
	return Estimate(
		mean=point_estimate(results),
		consensus=consensus(results, baseline),
		lower=lower,
		upper=upper,
		rounds=int(results.size),
	)
