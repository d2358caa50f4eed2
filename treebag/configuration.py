import appdirs
import os
import yaml
from collections.abc import MutableMapping

config_dir = appdirs.user_config_dir(appname='treebag', appauthor='treebag')
config_file = os.environ.get('TREEBAG_CONFIG', os.path.join(config_dir, 'config.yaml'))

DEFAULTS = {
	'rounds': 500,
	'subset_size': 'sqrt',
	'n_jobs': None,
	'on_degenerate': 'raise',
	'max_retries': 10,
	'interval': [0.025, 0.975],
}


class Config(MutableMapping):
	"""
	A configuration dictionary-like object.

	Args:
		filename (str): Initial values for this dictionary are
			loaded from this file using `yaml.safe_load`. Changes
			to this dictionary are immediately written to disk in
			the same file.
		makedirs (bool, default True): If true, any intermediate
			directories are created as needed when the file is
			first written.

	"""

	def __init__(self, filename, makedirs=True):
		self._filename = filename
		self._makedirs = makedirs
		if os.path.exists(self._filename):
			with open(self._filename) as s:
				self._data = yaml.safe_load(s)
			if self._data is None:
				self._data = {}
		else:
			self._data = {}

	def _write(self):
		text = yaml.safe_dump(self._data)
		if self._makedirs:
			os.makedirs(os.path.dirname(os.path.abspath(self._filename)), exist_ok=True)
		with open(self._filename, 'wt') as s:
			s.write(text)

	def _update(self, change):
		previous = dict(self._data)
		change()
		try:
			self._write()
		except yaml.YAMLError:
			self._data = previous
			raise

	def __getitem__(self, item):
		return self._data[item]

	def __setitem__(self, key, value):
		self._update(lambda: self._data.__setitem__(key, value))

	def __delitem__(self, key):
		self._update(lambda: self._data.__delitem__(key))

	def __iter__(self):
		return self._data.__iter__()

	def __len__(self):
		return self._data.__len__()

	def __repr__(self):
		return f"<treebag.Config {self._filename}>\n"+self._data.__repr__()

	def value(self, key):
		"""Get a configured value, falling back to the package default.

		Args:
			key (str): The name of the setting.

		Raises:
			KeyError: If the setting is neither configured nor
				has a package default.
		"""
		if key in self._data:
			return self._data[key]
		return DEFAULTS[key]

config = Config(config_file)


def config_value(key):
	"""Get a setting from the user configuration, or its default."""
	return config.value(key)
