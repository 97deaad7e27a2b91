import pytest

import polytrack.track
import conftest


def test_new_multitrack_has_empty_tracks () -> None:

	"""A fresh multitrack has the requested number of empty tracks and the resolution."""

	multitrack = polytrack.track.MultiTrack(3, ticks_per_beat=96)

	assert multitrack.num_tracks == 3
	assert multitrack.ticks_per_beat == 96
	assert multitrack.num_tracks_with_events() == 0
	assert multitrack.num_events() == 0


def test_clear_and_resize_discards_events () -> None:

	"""Resizing drops every previous event and bumps the generation."""

	multitrack = polytrack.track.MultiTrack(1)
	multitrack.get_track(0).put_event(conftest.note_on(0))
	generation = multitrack.generation

	multitrack.clear_and_resize(2)

	assert multitrack.num_tracks == 2
	assert multitrack.num_events() == 0
	assert multitrack.generation == generation + 1


def test_clear_and_resize_rejects_negative_count () -> None:

	"""A negative track count is an error."""

	with pytest.raises(ValueError):
		polytrack.track.MultiTrack().clear_and_resize(-1)


def test_resolution_must_be_positive () -> None:

	"""Setting a non-positive resolution raises ValueError."""

	multitrack = polytrack.track.MultiTrack()

	with pytest.raises(ValueError, match="Ticks per beat"):
		multitrack.ticks_per_beat = 0


def test_get_track_out_of_range () -> None:

	"""An invalid track index raises TrackIndexError, which is an IndexError."""

	multitrack = polytrack.track.MultiTrack(2)

	with pytest.raises(polytrack.track.TrackIndexError):
		multitrack.get_track(2)

	with pytest.raises(IndexError):
		multitrack.get_track(-1)


def test_put_event_keeps_order () -> None:

	"""Events at equal or later times are appended; earlier ones are rejected."""

	track = polytrack.track.Track()

	assert track.put_event(conftest.note_on(10))
	assert track.put_event(conftest.note_on(10, pitch=64))
	assert not track.put_event(conftest.note_on(5))

	assert [event.time for event in track] == [10, 10]


def test_put_event_respects_capacity () -> None:

	"""A full track rejects further events."""

	track = polytrack.track.Track(max_events=1)

	assert track.put_event(conftest.note_on(0))
	assert not track.put_event(conftest.note_on(1))
	assert len(track) == 1


def test_last_event_time_of_empty_track_is_zero () -> None:

	"""An empty track reports 0 and callers check is_empty() to tell the difference."""

	track = polytrack.track.Track()

	assert track.last_event_time() == 0
	assert track.is_empty()

	track.put_event(conftest.note_on(0))

	assert track.last_event_time() == 0
	assert not track.is_empty()


def test_get_event_by_index () -> None:

	"""Events are accessible by container index, with range checking."""

	track = polytrack.track.Track()
	track.put_event(conftest.note_on(0, pitch=60))
	track.put_event(conftest.note_on(12, pitch=62))

	assert track[1].message.note == 62
	assert track.get_event(0).time == 0

	with pytest.raises(IndexError):
		track.get_event(2)


def test_subscript_counts_from_the_end () -> None:

	"""track[-1] is the last event; get_event() itself stays strict."""

	track = polytrack.track.Track()
	track.put_event(conftest.note_on(0, pitch=60))
	track.put_event(conftest.note_on(12, pitch=62))

	assert track[-1].message.note == 62
	assert track[-2].message.note == 60

	with pytest.raises(IndexError):
		track[-3]

	with pytest.raises(IndexError):
		track.get_event(-1)


def test_num_tracks_with_events (make_multitrack) -> None:

	"""Only tracks holding at least one event are counted."""

	multitrack = make_multitrack([conftest.note_on(0)], [], [conftest.control(3)])

	assert multitrack.num_tracks_with_events() == 2
	assert multitrack.num_events() == 2
