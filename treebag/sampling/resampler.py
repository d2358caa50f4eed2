import numpy as np

from ..exceptions import InvalidConfiguration
from ..util import as_random_state


class Resampler:
	"""
	Draw bootstrap rows and random feature subsets.

	Every draw uses the random source held by this resampler, so a
	resampler built from a fixed seed reproduces a fixed sequence of
	draws.

	Args:
		random_state (None, int, or numpy.random.RandomState):
			The random source.  A RandomState instance is used
			directly (and advanced by each draw).
	"""

	def __init__(self, random_state=None):
		self.random_state = as_random_state(random_state)

	def draw_bootstrap_rows(self, n):
		"""
		Draw `n` row positions uniformly with replacement.

		Args:
			n (int): The number of rows in the table.

		Returns:
			numpy.ndarray of int, shape [n]: Positions in [0, n).
		"""
		if n <= 0:
			raise InvalidConfiguration(f"cannot bootstrap {n} rows")
		return self.random_state.randint(0, n, size=n)

	def draw_feature_subset(self, columns, m):
		"""
		Draw `m` distinct columns uniformly without replacement.

		Args:
			columns (Collection): The available feature columns.
				Repeated names are counted once.
			m (int): The subset size.

		Returns:
			tuple: The chosen columns, in their original order.
		"""
		columns = list(dict.fromkeys(columns))
		if m < 1:
			raise InvalidConfiguration(f"subset size must be at least 1, not {m}")
		if m > len(columns):
			raise InvalidConfiguration(
				f"subset size {m} exceeds the {len(columns)} available columns"
			)
		picked = self.random_state.choice(len(columns), size=m, replace=False)
		return tuple(columns[i] for i in np.sort(picked))

	def draw(self, n, columns, m):
		"""Draw bootstrap rows, then an independent feature subset."""
		rows = self.draw_bootstrap_rows(n)
		subset = self.draw_feature_subset(columns, m)
		return rows, subset
