"""Time-domain rewrites of multitracks.

Two functions build a new multitrack from a source, driven by a
`Sequencer`:

- `compress_start_pause()` squeezes the silence before the first sounding
  note down to one tick per distinct time point.
- `clip_multitrack()` truncates the music to a duration in seconds.

The other two edit one track of an existing multitrack in place:

- `last_events_prolongation()` delays the trailing events of a track.
- `add_ending_pause()` appends a silent note after the last event.
"""

import dataclasses
import enum
import logging

import polytrack.constants
import polytrack.message
import polytrack.sequencer
import polytrack.track


logger = logging.getLogger(__name__)


class CompressionPhase (enum.Enum):

	"""Where leading-pause compression has got to."""

	COMPRESSING = "compressing"
	PASS_THROUGH = "pass_through"


@dataclasses.dataclass
class CompressionState:

	"""
	Running state of a leading-pause compression.

	While compressing, each new original time point advances
	``compressed_time`` by one tick.  The first sounding note-on fixes
	``offset``, and every later event is shifted left by it.
	"""

	phase: CompressionPhase = CompressionPhase.COMPRESSING
	previous_time: int = 0
	compressed_time: int = 0
	offset: int = 0


	def restamp (self, event: polytrack.message.Event) -> int:

		"""
		Return the new time for an event and advance the state.
		"""

		if self.phase is CompressionPhase.PASS_THROUGH:
			return event.time - self.offset

		if event.time > self.previous_time:
			self.compressed_time += 1

		self.previous_time = event.time

		if event.is_note_on() and not event.is_note_on_with_zero_velocity():
			self.phase = CompressionPhase.PASS_THROUGH
			self.offset = event.time - self.compressed_time

		return self.compressed_time


def _prepare_destination (src: polytrack.track.MultiTrack, dst: polytrack.track.MultiTrack) -> None:

	dst.clear_and_resize(src.num_tracks)
	dst.ticks_per_beat = src.ticks_per_beat


def compress_start_pause (src: polytrack.track.MultiTrack, dst: polytrack.track.MultiTrack) -> None:

	"""
	Copy ``src`` into ``dst`` with the leading pause compressed.

	Before the first note-on with a non-zero velocity, every gap between
	distinct event times shrinks to a single tick; events that were
	simultaneous stay simultaneous.  From that note on, the original spacing
	is kept, shifted left so the note lands on its compressed time.

	An empty source leaves ``dst`` with the same track count and resolution
	but no events.
	"""

	_prepare_destination(src, dst)

	sequencer = polytrack.sequencer.Sequencer(src)
	sequencer.seek_to_start()

	if sequencer.peek_next_tick_time() is None:
		return

	state = CompressionState()

	while True:

		item = sequencer.next_event()

		if item is None:
			break

		track_index, event = item

		if event.is_service_message():
			continue

		dst.get_track(track_index).put_event(event.copy(time=state.restamp(event)))

	logger.debug(f"Compressed leading pause: offset {state.offset} ticks ({state.phase.value})")


def clip_multitrack (src: polytrack.track.MultiTrack, dst: polytrack.track.MultiTrack, max_time_sec: float) -> None:

	"""
	Copy ``src`` into ``dst`` up to a duration in seconds.

	Events are copied in time order.  Copying stops after the first event
	whose time reaches or passes the limit, so that event is included and
	nothing after it is.  Everything is copied when the music is shorter
	than the limit.
	"""

	if max_time_sec < 0:
		raise ValueError("Maximum duration cannot be negative")

	_prepare_destination(src, dst)

	max_event_time = max_time_sec * polytrack.constants.MS_PER_SECOND

	sequencer = polytrack.sequencer.Sequencer(src)
	sequencer.seek_to_start_ms()

	event_time = sequencer.peek_next_time_ms()

	if event_time is None:
		return

	while True:

		item = sequencer.next_event()

		if item is None:
			break

		track_index, event = item
		dst.get_track(track_index).put_event(event.copy())

		if event_time >= max_event_time:
			break

		event_time = sequencer.peek_next_time_ms()

		if event_time is None:
			break

	logger.debug(f"Clipped to {max_time_sec} s: kept {dst.num_events()} of {src.num_events()} events")


def last_events_prolongation (multitrack: polytrack.track.MultiTrack, track_num: int, add_ticks: int) -> None:

	"""
	Delay the events at the end of a track by ``add_ticks``.

	Every trailing event sharing the latest time moves together, so a final
	chord stays a chord.  Earlier events are untouched.  An empty track is
	left alone.
	"""

	if add_ticks < 0:
		raise ValueError("Prolongation cannot be negative")

	track = multitrack.get_track(track_num)
	index = len(track) - 1

	if index < 0:
		return

	last_time = track.get_event(index).time

	while index >= 0 and track.get_event(index).time == last_time:
		track.get_event(index).time = last_time + add_ticks
		index -= 1


def add_ending_pause (multitrack: polytrack.track.MultiTrack, track_num: int, pause_ticks: int) -> bool:

	"""
	Append a silent note ``pause_ticks`` after the last event of a track.

	The note is the lowest pitch on channel 0 with velocity 0, i.e. a note
	off.  Returns False if the track rejects the event.
	"""

	if pause_ticks < 0:
		raise ValueError("Pause cannot be negative")

	track = multitrack.get_track(track_num)

	event = polytrack.message.Event.note_on(
		time = track.last_event_time() + pause_ticks,
		pitch = polytrack.constants.LOWEST_PITCH,
		channel = polytrack.constants.DEFAULT_CHANNEL,
		velocity = 0
	)

	return track.put_event(event)
