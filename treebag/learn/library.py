"""
Library random forests, for contrast with the hand-built ensemble.
"""

from sklearn.ensemble import RandomForestClassifier
from sklearn.tree import DecisionTreeClassifier

from .oracle import FittedTree
from ..exceptions import DegenerateSample, InvalidConfiguration


def _full_sample(table):
	if table.n_rows == 0:
		raise InvalidConfiguration("cannot fit an empty table")
	data = table.data
	y = data[table.label]
	if y.nunique() < 2:
		raise DegenerateSample("the training table holds a single class")
	return data[list(table.features)], y


def forest_probability(
		table,
		query,
		n_estimators=500,
		max_features='sqrt',
		random_state=None,
		n_jobs=None,
):
	"""
	Positive-class probability from a scikit-learn random forest.

	Unlike the hand-built ensemble, the library forest subsamples
	features at every split rather than once per tree.

	Args:
		table (TrainingTable): The training data.
		query (Mapping or pandas.Series): The record to score.
		n_estimators (int, default 500): Number of trees.
		max_features (int, float or str, default 'sqrt'): Features
			considered at each split.
		random_state (int or RandomState, optional): Random state to use.
		n_jobs (int, optional): Parallel jobs for fitting.

	Returns:
		float
	"""
	X, y = _full_sample(table)
	model = RandomForestClassifier(
		n_estimators=n_estimators,
		max_features=max_features,
		random_state=random_state,
		n_jobs=n_jobs,
	)
	model.fit(X, y)
	return FittedTree(model, table.features, table.positive).predict_proba(query)


def single_tree_probability(table, query, random_state=None, **kwargs):
	"""
	Positive-class probability from one tree fit on the whole table.

	Extra keyword arguments are passed to `DecisionTreeClassifier`.
	"""
	X, y = _full_sample(table)
	model = DecisionTreeClassifier(random_state=random_state, **kwargs)
	model.fit(X, y)
	return FittedTree(model, table.features, table.positive).predict_proba(query)
