import dataclasses
import logging
import os
import typing

import yaml


logger = logging.getLogger(__name__)


@dataclasses.dataclass
class Config:

	"""
	Defaults for the command line tool.

	Each field may be set in a YAML file; command line options override them.
	``None`` means the operation is skipped.
	"""

	compress: bool = False
	clip_seconds: typing.Optional[float] = None
	prolong_ticks: typing.Optional[int] = None
	ending_pause_ticks: typing.Optional[int] = None
	use_running_status: bool = True

	def __post_init__ (self) -> None:

		for name in ('compress', 'use_running_status'):
			if not isinstance(getattr(self, name), bool):
				raise ValueError(f"{name} must be true or false")

		if self.clip_seconds is not None:
			if isinstance(self.clip_seconds, bool) or not isinstance(self.clip_seconds, (int, float)):
				raise ValueError("clip_seconds must be a number")
			if self.clip_seconds < 0:
				raise ValueError("clip_seconds cannot be negative")

		for name in ('prolong_ticks', 'ending_pause_ticks'):
			value = getattr(self, name)
			if value is None:
				continue
			if isinstance(value, bool) or not isinstance(value, int):
				raise ValueError(f"{name} must be a whole number of ticks")
			if value < 0:
				raise ValueError(f"{name} cannot be negative")


def load_config (config_path: str = 'polytrack.yaml') -> Config:

	"""
	Load configuration from a YAML file.

	A missing file gives the defaults.  Unknown keys raise ``ValueError``.
	"""

	if not os.path.exists(config_path):
		logger.warning(f"Config file {config_path} not found. Using defaults.")
		return Config()

	with open(config_path, 'r') as f:
		data = yaml.safe_load(f) or {}

	if not isinstance(data, dict):
		raise ValueError(f"Config file {config_path} must contain a mapping")

	known = {field.name for field in dataclasses.fields(Config)}
	unknown = sorted(set(data) - known)

	if unknown:
		raise ValueError(f"Unknown config keys in {config_path}: {', '.join(unknown)}")

	return Config(**data)
