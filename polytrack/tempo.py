import bisect
import dataclasses
import typing

import mido

import polytrack.constants
import polytrack.track


@dataclasses.dataclass
class TempoSegment:

	"""
	A stretch of the timeline played at a single tempo.
	"""

	start_tick: int
	start_ms: float
	tempo: int				# microseconds per beat


class TempoMap:

	"""
	Converts between tick time and elapsed milliseconds.

	Tempo changes are global: ``set_tempo`` meta messages from every track
	are merged into one timeline.  Until the first change the MIDI default
	tempo (120 BPM) applies.
	"""

	def __init__ (self, ticks_per_beat: int, tempo_changes: typing.Iterable[typing.Tuple[int, int]] = ()) -> None:

		"""
		Build the map from a resolution and ``(tick, tempo)`` pairs.

		Pairs need not be sorted.  When several changes share a tick, the
		last one in the given order wins.
		"""

		if ticks_per_beat <= 0:
			raise ValueError("Ticks per beat must be positive")

		self.ticks_per_beat = ticks_per_beat
		self.segments: typing.List[TempoSegment] = [TempoSegment(0, 0.0, polytrack.constants.DEFAULT_TEMPO)]

		for tick, tempo in sorted(tempo_changes, key=lambda change: change[0]):

			if tempo <= 0:
				raise ValueError("Tempo must be positive")

			last = self.segments[-1]

			if tick == last.start_tick:
				last.tempo = tempo
				continue

			start_ms = last.start_ms + self._segment_ms(tick - last.start_tick, last.tempo)
			self.segments.append(TempoSegment(tick, start_ms, tempo))

		self._start_ticks = [segment.start_tick for segment in self.segments]
		self._start_ms = [segment.start_ms for segment in self.segments]


	@classmethod
	def from_multitrack (cls, multitrack: polytrack.track.MultiTrack) -> "TempoMap":

		"""
		Collect the tempo changes of every track of a multitrack.
		"""

		changes: typing.List[typing.Tuple[int, int]] = []

		for track in multitrack:
			for event in track:
				if event.is_tempo_change():
					changes.append((event.time, event.message.tempo))  # type: ignore[union-attr]

		return cls(multitrack.ticks_per_beat, changes)


	def _segment_ms (self, ticks: float, tempo: int) -> float:
		return mido.tick2second(ticks, self.ticks_per_beat, tempo) * polytrack.constants.MS_PER_SECOND


	def tick_to_ms (self, tick: float) -> float:

		"""
		Return the elapsed milliseconds at a tick time.
		"""

		if tick < 0:
			raise ValueError("Tick time cannot be negative")

		segment = self.segments[bisect.bisect_right(self._start_ticks, tick) - 1]

		return segment.start_ms + self._segment_ms(tick - segment.start_tick, segment.tempo)


	def ms_to_tick (self, ms: float) -> float:

		"""
		Return the (fractional) tick time reached after ``ms`` milliseconds.
		"""

		if ms < 0:
			raise ValueError("Time cannot be negative")

		segment = self.segments[bisect.bisect_right(self._start_ms, ms) - 1]
		seconds = (ms - segment.start_ms) / polytrack.constants.MS_PER_SECOND

		# mido.second2tick() rounds to whole ticks, so divide by the length of one tick instead.
		return segment.start_tick + seconds / mido.tick2second(1, self.ticks_per_beat, segment.tempo)


	def duration_seconds (self, last_tick: int) -> float:
		return self.tick_to_ms(last_tick) / polytrack.constants.MS_PER_SECOND
