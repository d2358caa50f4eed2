import pytest

from treebag import configuration


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
	"""Point the package configuration at an empty file for each test."""
	cfg = configuration.Config(str(tmp_path / "treebag" / "config.yaml"))
	monkeypatch.setattr(configuration, "config", cfg)
	return cfg
