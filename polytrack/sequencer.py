import enum
import logging
import math
import typing

import polytrack.message
import polytrack.tempo
import polytrack.track


logger = logging.getLogger(__name__)


class CursorState (enum.Enum):

	"""Lifecycle of a sequencer."""

	UNPOSITIONED = "unpositioned"
	POSITIONED = "positioned"
	EXHAUSTED = "exhausted"


class CursorStateError (RuntimeError):
	pass


class Sequencer:

	"""
	A chronological cursor over every track of a multitrack.

	The sequencer merges the independently ordered tracks into one stream in
	non-decreasing time order.  Events sharing a tick come out in ascending
	track order, and in insertion order within a track.  Service events are
	consumed silently.  The multitrack itself is never modified; events are
	returned by reference, so callers that want to change one should work on
	``event.copy()``.

	The sequencer has to be positioned with one of the ``seek`` methods
	before reading.  Resizing the multitrack invalidates the position.
	"""

	def __init__ (self, multitrack: polytrack.track.MultiTrack, beat_markers: bool = False) -> None:

		"""Bind the sequencer to a multitrack.

		Parameters:
			multitrack: The multitrack to read.  It stays bound for the
				lifetime of the sequencer.
			beat_markers: When True, synthesize a beat marker event (reported
				on track 0) on every beat up to the last event.  A marker comes
				before real events on the same tick.
		"""

		self.multitrack = multitrack
		self.beat_markers = beat_markers
		self.tempo_map = polytrack.tempo.TempoMap.from_multitrack(multitrack)

		self.state = CursorState.UNPOSITIONED
		self.current_tick_time: int = 0
		self.current_time_ms: float = 0.0

		self._indexes: typing.List[int] = []
		self._next_beat_tick = 0
		self._generation = multitrack.generation


	def seek_to_start (self) -> None:

		"""Go to tick zero."""

		self.seek(0)


	def seek_to_start_ms (self) -> None:

		"""Go to zero milliseconds."""

		self.seek_ms(0.0)


	def seek (self, tick: int) -> None:

		"""
		Go to a tick time.  The next event read is the first one at or after it.
		"""

		if tick < 0:
			raise ValueError("Seek time cannot be negative")

		self._refresh()
		self._position(lambda time: time >= tick, tick)

		self.current_tick_time = tick
		self.current_time_ms = self.tempo_map.tick_to_ms(tick)


	def seek_ms (self, ms: float) -> None:

		"""
		Go to a time in milliseconds.  The next event read is the first one at or after it.
		"""

		if ms < 0:
			raise ValueError("Seek time cannot be negative")

		self._refresh()

		# Compare in milliseconds: ms_to_tick() can land a hair past a whole tick.
		tick_to_ms = self.tempo_map.tick_to_ms
		tick = self.tempo_map.ms_to_tick(ms)
		nearest = round(tick)

		if math.isclose(tick_to_ms(nearest), ms, abs_tol=1e-9):
			tick = nearest

		self._position(lambda time: time >= tick or tick_to_ms(time) >= ms, tick)

		self.current_tick_time = math.ceil(tick)
		self.current_time_ms = ms


	def _refresh (self) -> None:

		"""Pick up the multitrack's current contents and tempo changes."""

		self.tempo_map = polytrack.tempo.TempoMap.from_multitrack(self.multitrack)
		self._generation = self.multitrack.generation


	def _position (self, reached: typing.Callable[[int], bool], tick: float) -> None:

		"""Move every track to its first event for which ``reached(event.time)`` holds."""

		indexes = []

		for track in self.multitrack:
			index = 0
			while index < len(track) and not reached(track.get_event(index).time):
				index += 1
			indexes.append(index)

		self._indexes = indexes

		ticks_per_beat = self.multitrack.ticks_per_beat
		self._next_beat_tick = math.ceil(tick / ticks_per_beat) * ticks_per_beat

		self._skip_service_events()
		self.state = CursorState.POSITIONED if self._next_candidate() is not None else CursorState.EXHAUSTED

		logger.debug(f"Sequencer positioned at tick {tick} ({self.state.value})")


	def _check_readable (self) -> None:

		if self.state is CursorState.UNPOSITIONED:
			raise CursorStateError("Sequencer must be positioned with seek_to_start() before reading")

		if self._generation != self.multitrack.generation:
			raise CursorStateError("Multitrack was resized - seek again before reading")


	def _skip_service_events (self) -> None:

		for track_index, track in enumerate(self.multitrack):
			index = self._indexes[track_index]
			while index < len(track) and track.get_event(index).is_service_message():
				index += 1
			self._indexes[track_index] = index


	def _next_candidate (self) -> typing.Optional[typing.Tuple[int, polytrack.message.Event]]:

		"""
		Find the next event without consuming it.

		A linear scan over the track heads; strict comparison keeps the lowest
		track index on ties.
		"""

		best: typing.Optional[typing.Tuple[int, polytrack.message.Event]] = None

		for track_index, track in enumerate(self.multitrack):

			index = self._indexes[track_index]

			if index >= len(track):
				continue

			event = track.get_event(index)

			if best is None or event.time < best[1].time:
				best = (track_index, event)

		if best is None:
			return None

		if self.beat_markers and self._next_beat_tick <= best[1].time:
			return (0, polytrack.message.Event.beat_marker(self._next_beat_tick))

		return best


	def peek_next_tick_time (self) -> typing.Optional[int]:

		"""
		Return the tick time of the next event, or None when the stream is exhausted.
		"""

		self._check_readable()

		# Agrees with next_event(): events appended after exhaustion need a new seek.
		if self.state is CursorState.EXHAUSTED:
			return None

		candidate = self._next_candidate()

		if candidate is None:
			return None

		return candidate[1].time


	def peek_next_time_ms (self) -> typing.Optional[float]:

		"""
		Return the time of the next event in milliseconds, or None when the stream is exhausted.
		"""

		tick = self.peek_next_tick_time()

		if tick is None:
			return None

		return self.tempo_map.tick_to_ms(tick)


	def next_event (self) -> typing.Optional[typing.Tuple[int, polytrack.message.Event]]:

		"""
		Consume the next event and return ``(track_index, event)``.

		Returns None once every track is drained.
		"""

		self._check_readable()

		if self.state is CursorState.EXHAUSTED:
			return None

		candidate = self._next_candidate()

		if candidate is None:
			self.state = CursorState.EXHAUSTED
			return None

		track_index, event = candidate

		if event.is_beat_marker():
			self._next_beat_tick += self.multitrack.ticks_per_beat
		else:
			self._indexes[track_index] += 1
			self._skip_service_events()

		self.current_tick_time = event.time
		self.current_time_ms = self.tempo_map.tick_to_ms(event.time)

		if self._next_candidate() is None:
			self.state = CursorState.EXHAUSTED

		return track_index, event


	def duration_seconds (self) -> float:

		"""
		Return the length of the music in seconds, up to the latest event of any track.
		"""

		tempo_map = polytrack.tempo.TempoMap.from_multitrack(self.multitrack)

		last_tick = max((track.last_event_time() for track in self.multitrack), default=0)

		return tempo_map.duration_seconds(last_tick)
