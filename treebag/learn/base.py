
from sklearn.base import clone
import inspect

def clone_or_construct(estimator):
	"""
	Clone a classifier, or construct a default one from a class or function.

	Parameters
	----------
	estimator : sklearn classifier instance, class, or a function returning same.

	Returns
	-------
	estimator
		A fresh, unfitted classifier.
	"""
	try:
		return clone(estimator)
	except TypeError:
		if inspect.isclass(estimator) or inspect.isfunction(estimator):
			return estimator()
		else:
			raise


def seed_estimator(estimator, random_state):
	"""Set `random_state` on an estimator, if it takes one."""
	if random_state is not None and 'random_state' in estimator.get_params():
		estimator.set_params(random_state=random_state)
	return estimator
