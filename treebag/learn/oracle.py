from sklearn.tree import DecisionTreeClassifier

from .base import clone_or_construct, seed_estimator
from ..data.table import query_frame
from ..exceptions import DegenerateSample
from ..util.loggers import get_module_logger

_logger = get_module_logger(__name__)


class TreeOracle:
	"""
	Fit one classification tree to a restricted training table.

	Args:
		estimator (sklearn classifier, class, or factory, optional):
			The template learner, cloned afresh for each fit.
			Defaults to an unpruned `DecisionTreeClassifier`.
	"""

	def __init__(self, estimator=None):
		if estimator is None:
			estimator = DecisionTreeClassifier
		self.estimator = estimator

	def __repr__(self):
		return f"<treebag.TreeOracle {self.estimator!r}>"

	def fit(self, sample, random_state=None):
		"""
		Fit the learner on a restricted table.

		Args:
			sample (RestrictedTable): The rows and columns to train on.
			random_state (int, optional): Seed forwarded to the learner
				when it accepts one.

		Returns:
			FittedTree

		Raises:
			DegenerateSample: If the sampled labels hold fewer than two
				distinct classes.
		"""
		y = sample.y
		n_classes = y.nunique()
		if n_classes < 2:
			_logger.debug(f"degenerate sample, {n_classes} class(es) in {len(y)} rows")
			raise DegenerateSample(
				f"sampled labels hold {n_classes} class(es), at least 2 are needed"
			)
		model = seed_estimator(clone_or_construct(self.estimator), random_state)
		model.fit(sample.X, y)
		return FittedTree(model, sample.columns, sample.positive)


class FittedTree:
	"""A fitted learner together with the columns and class it answers for."""

	def __init__(self, model, columns, positive):
		self.model = model
		self.columns = tuple(columns)
		self.positive = positive

	def predict_proba(self, record):
		"""
		Probability of the positive class for one record.

		Args:
			record (Mapping or pandas.Series): Feature values by name;
				only the columns this tree was fit on are read.

		Returns:
			float
		"""
		proba = self.model.predict_proba(query_frame(record, self.columns))[0]
		classes = list(self.model.classes_)
		if self.positive not in classes:
			# positive class absent from a single-class table
			return 0.0
		return float(proba[classes.index(self.positive)])
