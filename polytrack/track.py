import logging
import typing

import polytrack.constants
import polytrack.message


logger = logging.getLogger(__name__)


class TrackIndexError (IndexError):
	pass


class Track:

	"""
	A time-ordered list of events.

	Events are appended at the tail and must not be earlier than the last
	event already in the track.  Producers in this package always emit in
	increasing time order per track.
	"""

	def __init__ (self, max_events: typing.Optional[int] = None) -> None:

		"""
		Initialize an empty track.

		Parameters:
			max_events: Optional capacity.  Appends beyond it are rejected.
		"""

		if max_events is not None and max_events < 0:
			raise ValueError("max_events cannot be negative")

		self.max_events = max_events
		self._events: typing.List[polytrack.message.Event] = []


	def __len__ (self) -> int:
		return len(self._events)


	def __iter__ (self) -> typing.Iterator[polytrack.message.Event]:
		return iter(self._events)


	def __getitem__ (self, index: int) -> polytrack.message.Event:

		"""Like get_event(), but negative indexes count from the end as for a list."""

		if index < 0:
			index += len(self._events)

		return self.get_event(index)


	def is_empty (self) -> bool:
		return not self._events


	def get_event (self, index: int) -> polytrack.message.Event:

		"""
		Return the event at a container index.

		Negative indexes are not accepted here; use ``track[-1]`` to count from the end.
		"""

		if index < 0 or index >= len(self._events):
			raise IndexError(f"Event index {index} out of range for track with {len(self._events)} events")

		return self._events[index]


	def last_event_time (self) -> int:

		"""
		Return the time of the last event, or 0 for an empty track.
		"""

		if not self._events:
			return 0

		return self._events[-1].time


	def put_event (self, event: polytrack.message.Event) -> bool:

		"""
		Append an event at the tail of the track.

		Returns False (and leaves the track unchanged) when the track is full
		or when the event is earlier than the current last event.
		"""

		if self.max_events is not None and len(self._events) >= self.max_events:
			logger.warning(f"Track full ({self.max_events} events) - event at tick {event.time} rejected")
			return False

		if self._events and event.time < self._events[-1].time:
			logger.warning(f"Event at tick {event.time} is earlier than last event at tick {self._events[-1].time} - rejected")
			return False

		self._events.append(event)

		return True


	def clear (self) -> None:
		self._events.clear()


class MultiTrack:

	"""
	A list of tracks sharing one resolution (ticks per beat).

	The track index is the identity used for output routing.  Resizing
	discards every track and bumps ``generation``, which invalidates any
	sequencer positioned over the previous contents.
	"""

	def __init__ (self, num_tracks: int = 0, ticks_per_beat: int = polytrack.constants.DEFAULT_TICKS_PER_BEAT) -> None:

		"""
		Initialize with a number of empty tracks and a resolution.
		"""

		self._tracks: typing.List[Track] = []
		self._ticks_per_beat = 0
		self.generation = 0

		self.ticks_per_beat = ticks_per_beat
		self.clear_and_resize(num_tracks)


	@property
	def ticks_per_beat (self) -> int:
		return self._ticks_per_beat


	@ticks_per_beat.setter
	def ticks_per_beat (self, value: int) -> None:

		if value <= 0:
			raise ValueError("Ticks per beat must be positive")

		self._ticks_per_beat = value


	@property
	def num_tracks (self) -> int:
		return len(self._tracks)


	def __len__ (self) -> int:
		return len(self._tracks)


	def __iter__ (self) -> typing.Iterator[Track]:
		return iter(self._tracks)


	def clear_and_resize (self, num_tracks: int) -> None:

		"""
		Discard all tracks and allocate ``num_tracks`` empty ones.
		"""

		if num_tracks < 0:
			raise ValueError("Number of tracks cannot be negative")

		self._tracks = [Track() for _ in range(num_tracks)]
		self.generation += 1


	def get_track (self, index: int) -> Track:

		"""
		Return the track at an index, raising TrackIndexError when out of range.
		"""

		if index < 0 or index >= len(self._tracks):
			raise TrackIndexError(f"Track index {index} out of range for multitrack with {len(self._tracks)} tracks")

		return self._tracks[index]


	def num_tracks_with_events (self) -> int:

		"""
		Count the tracks holding at least one event.
		"""

		return sum(1 for track in self._tracks if not track.is_empty())


	def num_events (self) -> int:
		return sum(len(track) for track in self._tracks)
