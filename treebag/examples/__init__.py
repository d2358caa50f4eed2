"""
Example spam-shaped data sets.
"""

import numpy as np
import pandas as pd
from sklearn.datasets import make_classification

from ..data.table import TrainingTable
from ..exceptions import InvalidConfiguration

SPAMBASE_FEATURES = 57


def make_spam_like(n_rows=200, n_features=SPAMBASE_FEATURES, random_state=0, spam_fraction=0.4):
	"""
	A synthetic table shaped like the spambase data.

	Args:
		n_rows (int, default 200): Number of records.
		n_features (int, default 57): Number of numeric feature columns.
		random_state (int or RandomState, default 0): Random state to use.
		spam_fraction (float, default 0.4): Approximate share of spam.

	Returns:
		TrainingTable: Label column 'type', positive class 'spam'.
	"""
	n_informative = max(1, min(n_features, n_features // 3))
	X, y = make_classification(
		n_samples=n_rows,
		n_features=n_features,
		n_informative=n_informative,
		n_redundant=0,
		n_repeated=0,
		weights=[1 - spam_fraction],
		random_state=random_state,
	)
	df = pd.DataFrame(np.abs(X), columns=[f"x{i:02d}" for i in range(n_features)])
	df['type'] = np.where(y == 1, 'spam', 'nonspam')
	return TrainingTable(df, label='type', positive='spam')


def load_spambase(filename, **kwargs):
	"""
	Read the UCI spambase file layout.

	The file has no header: 57 numeric feature columns followed by a
	0/1 spam indicator.

	Args:
		filename (str or path-like): The CSV file.
		**kwargs: Passed to `pandas.read_csv`.

	Returns:
		TrainingTable: Label column 'type', positive class 'spam'.
	"""
	df = pd.read_csv(filename, header=None, **kwargs)
	if df.shape[1] != SPAMBASE_FEATURES + 1:
		raise InvalidConfiguration(
			f"expected {SPAMBASE_FEATURES + 1} columns in spambase data, found {df.shape[1]}"
		)
	df.columns = [f"x{i:02d}" for i in range(SPAMBASE_FEATURES)] + ['type']
	df['type'] = np.where(df['type'] == 1, 'spam', 'nonspam')
	return TrainingTable(df, label='type', positive='spam')
