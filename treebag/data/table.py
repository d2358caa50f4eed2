import numpy as np
import pandas as pd

from ..exceptions import InvalidConfiguration


class TrainingTable:
	"""
	An immutable table of labeled records with a binary label.

	Args:
		data (pandas.DataFrame): The records, one row each, holding
			numeric feature columns and one label column.  The frame
			is copied, so later changes to `data` are not seen here.
		label (str): The name of the label column.
		positive (scalar, default 1): The label value treated as the
			positive class (e.g. 'spam').
		features (Collection[str], optional): The feature columns.
			Defaults to every column except `label`.

	Raises:
		InvalidConfiguration: If the label column is missing, a feature
			column is missing, or the label carries more than two
			distinct classes.
	"""

	def __init__(self, data, label, positive=1, features=None):
		if label not in data.columns:
			raise InvalidConfiguration(f"label column '{label}' not found")
		if features is None:
			features = [c for c in data.columns if c != label]
		else:
			features = list(features)
			missing = [c for c in features if c not in data.columns]
			if missing:
				raise InvalidConfiguration(f"feature columns not found: {missing}")
			if label in features:
				raise InvalidConfiguration("the label cannot also be a feature")
		n_classes = data[label].nunique()
		if n_classes > 2:
			raise InvalidConfiguration(
				f"label '{label}' has {n_classes} classes, only binary labels are supported"
			)
		if n_classes == 2 and positive not in set(data[label]):
			raise InvalidConfiguration(
				f"positive class {positive!r} is not one of the labels in '{label}'"
			)
		self._data = data[features + [label]].reset_index(drop=True).copy()
		self._features = tuple(features)
		self._label = label
		self._positive = positive

	def __repr__(self):
		return (
			f"<treebag.TrainingTable {self.n_rows} rows, "
			f"{self.n_features} features, label '{self.label}'>"
		)

	def __len__(self):
		return self.n_rows

	@property
	def data(self):
		"""pandas.DataFrame : A copy of the underlying records."""
		return self._data.copy()

	@property
	def features(self):
		return self._features

	@property
	def label(self):
		return self._label

	@property
	def positive(self):
		return self._positive

	@property
	def n_rows(self):
		return len(self._data)

	@property
	def n_features(self):
		return len(self._features)

	def baseline(self):
		"""
		The marginal frequency of the positive class.

		Returns:
			float
		"""
		if self.n_rows == 0:
			return 0.0
		return float((self._data[self._label] == self._positive).mean())

	def restrict(self, rows, columns):
		"""
		A view of this table limited to some rows and feature columns.

		Args:
			rows (array-like of int): Row positions, duplicates allowed.
			columns (Collection[str]): Feature columns to keep.  The
				label column is always kept.

		Returns:
			RestrictedTable
		"""
		return RestrictedTable(self, rows, columns)


class RestrictedTable:
	"""
	A row multiset and column subset over a TrainingTable.

	The restriction is stored as positions and names; the frames handed
	to a learner are materialized from the base table on request.
	"""

	def __init__(self, base, rows, columns):
		rows = np.array(rows, dtype=np.intp)
		if rows.ndim != 1:
			raise InvalidConfiguration("rows must be one dimensional")
		if len(rows) and (rows.min() < 0 or rows.max() >= base.n_rows):
			raise InvalidConfiguration("row positions out of range")
		columns = tuple(columns)
		unknown = [c for c in columns if c not in base.features]
		if unknown:
			raise InvalidConfiguration(f"unknown feature columns: {unknown}")
		rows.setflags(write=False)
		self.base = base
		self.rows = rows
		self.columns = columns

	def __repr__(self):
		return f"<treebag.RestrictedTable {len(self.rows)} rows, columns {list(self.columns)}>"

	@property
	def X(self):
		return self.base._data[list(self.columns)].iloc[self.rows].reset_index(drop=True)

	@property
	def y(self):
		return self.base._data[self.base.label].iloc[self.rows].reset_index(drop=True)

	@property
	def positive(self):
		return self.base.positive

	def n_classes(self):
		return int(self.y.nunique())


def query_frame(query, columns):
	"""
	Convert a single query record into a one-row DataFrame.

	Args:
		query (Mapping or pandas.Series): Feature values by column name.
		columns (Collection[str]): Columns to extract, in order.

	Returns:
		pandas.DataFrame
	"""
	try:
		values = [query[c] for c in columns]
	except KeyError as err:
		raise InvalidConfiguration(f"query record has no feature {err}") from err
	return pd.DataFrame([values], columns=list(columns))
