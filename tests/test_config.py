import pathlib

import pytest

import polytrack.config


def test_missing_file_gives_defaults (tmp_path: pathlib.Path) -> None:

	"""A missing config file is not an error."""

	config = polytrack.config.load_config(str(tmp_path / "absent.yaml"))

	assert config == polytrack.config.Config()
	assert config.use_running_status is True
	assert config.clip_seconds is None


def test_values_are_loaded (tmp_path: pathlib.Path) -> None:

	"""Values in the YAML file override the defaults."""

	path = tmp_path / "polytrack.yaml"
	path.write_text("compress: true\nclip_seconds: 30.5\nending_pause_ticks: 96\nuse_running_status: false\n")

	config = polytrack.config.load_config(str(path))

	assert config.compress is True
	assert config.clip_seconds == 30.5
	assert config.ending_pause_ticks == 96
	assert config.prolong_ticks is None
	assert config.use_running_status is False


def test_empty_file_gives_defaults (tmp_path: pathlib.Path) -> None:

	"""An empty YAML document is treated as no settings."""

	path = tmp_path / "empty.yaml"
	path.write_text("")

	assert polytrack.config.load_config(str(path)) == polytrack.config.Config()


def test_unknown_keys_are_rejected (tmp_path: pathlib.Path) -> None:

	"""Misspelt keys are reported rather than ignored."""

	path = tmp_path / "typo.yaml"
	path.write_text("clip_second: 10\n")

	with pytest.raises(ValueError, match="clip_second"):
		polytrack.config.load_config(str(path))


def test_non_mapping_is_rejected (tmp_path: pathlib.Path) -> None:

	"""The document must be a mapping."""

	path = tmp_path / "list.yaml"
	path.write_text("- 1\n- 2\n")

	with pytest.raises(ValueError, match="mapping"):
		polytrack.config.load_config(str(path))


def test_negative_values_are_rejected () -> None:

	"""Durations cannot be negative."""

	with pytest.raises(ValueError):
		polytrack.config.Config(clip_seconds=-1.0)

	with pytest.raises(ValueError):
		polytrack.config.Config(prolong_ticks=-1)

	with pytest.raises(ValueError):
		polytrack.config.Config(ending_pause_ticks=-1)


def test_wrongly_typed_values_are_rejected (tmp_path: pathlib.Path) -> None:

	"""Values of the wrong type are reported as ValueError, not TypeError."""

	path = tmp_path / "polytrack.yaml"
	path.write_text("clip_seconds: abc\n")

	with pytest.raises(ValueError, match="clip_seconds"):
		polytrack.config.load_config(str(path))

	with pytest.raises(ValueError, match="compress"):
		polytrack.config.Config(compress="yes please")

	with pytest.raises(ValueError, match="prolong_ticks"):
		polytrack.config.Config(prolong_ticks=1.5)

	with pytest.raises(ValueError, match="ending_pause_ticks"):
		polytrack.config.Config(ending_pause_ticks=True)

	assert polytrack.config.Config(clip_seconds=2).clip_seconds == 2
