
class TreebagError(Exception):
	"""Base class for errors raised by treebag."""


class InvalidConfiguration(TreebagError, ValueError):
	"""A parameter or input is outside the range an ensemble can use."""


class DegenerateSample(TreebagError):
	"""A resampled training table cannot be fit, e.g. it holds only one class."""


class ExhaustedRetries(TreebagError):
	"""Every redraw allowed by the retry budget produced a degenerate sample."""

	def __init__(self, message, attempts=None):
		super().__init__(message)
		self.attempts = attempts
