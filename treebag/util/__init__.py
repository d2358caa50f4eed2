
import numpy as np
from sklearn.utils import check_random_state

MAX_INT = np.iinfo(np.int32).max


def as_random_state(random_state=None):
	"""
	Turn `random_state` into a numpy RandomState instance.

	Unlike `sklearn.utils.check_random_state`, passing None gives a
	freshly seeded generator rather than numpy's global singleton, so
	that no sampling call ever touches shared global state.

	Args:
		random_state (None, int, or numpy.random.RandomState):
			An existing generator is returned as-is, an int
			seeds a new one, and None seeds a new one from
			operating system entropy.

	Returns:
		numpy.random.RandomState
	"""
	if random_state is None:
		return np.random.RandomState()
	return check_random_state(random_state)
