import typing

import mido
import pytest

import polytrack.message
import polytrack.track


TrackSpec = typing.Sequence[polytrack.message.Event]


def note_on (time: int, pitch: int = 60, velocity: int = 64, channel: int = 0) -> polytrack.message.Event:

	"""Shorthand for a note-on event."""

	return polytrack.message.Event.note_on(time=time, pitch=pitch, channel=channel, velocity=velocity)


def control (time: int, control: int = 7, value: int = 100, channel: int = 0) -> polytrack.message.Event:

	"""Shorthand for a control change event."""

	return polytrack.message.Event(time=time, message=mido.Message('control_change', channel=channel, control=control, value=value))


def tempo (time: int, bpm: float) -> polytrack.message.Event:

	"""Shorthand for a set_tempo meta event."""

	return polytrack.message.Event(time=time, message=mido.MetaMessage('set_tempo', tempo=mido.bpm2tempo(bpm)))


@pytest.fixture
def make_multitrack () -> typing.Callable[..., polytrack.track.MultiTrack]:

	"""Return a factory building a multitrack from lists of events, one list per track."""

	def factory (*tracks: TrackSpec, ticks_per_beat: int = 480) -> polytrack.track.MultiTrack:

		multitrack = polytrack.track.MultiTrack(len(tracks), ticks_per_beat=ticks_per_beat)

		for index, events in enumerate(tracks):
			for event in events:
				assert multitrack.get_track(index).put_event(event)

		return multitrack

	return factory
