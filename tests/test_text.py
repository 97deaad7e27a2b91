import polytrack.message
import polytrack.text
import conftest


def test_multitrack_as_text (make_multitrack) -> None:

	"""Each event is listed with its track, tick and millisecond time."""

	multitrack = make_multitrack(
		[conftest.note_on(0, pitch=60)],
		[conftest.note_on(480, pitch=62, velocity=0), polytrack.message.Event.service(960)],
		ticks_per_beat=480
	)

	assert polytrack.text.multitrack_as_text(multitrack) == (
		"Clocks per beat  480\n"
		"\n"
		"Track 0  Midi tick 0  Time msec 0  MSG note_on channel=0 note=60 velocity=64\n"
		"Track 1  Midi tick 480  Time msec 500  MSG note_on channel=0 note=62 velocity=0\n"
		"\n"
	)


def test_multitrack_as_text_of_empty_multitrack (make_multitrack) -> None:

	"""An empty multitrack renders just the header."""

	assert polytrack.text.multitrack_as_text(make_multitrack([], ticks_per_beat=96)) == "Clocks per beat  96\n\n\n"


def test_fractional_milliseconds (make_multitrack) -> None:

	"""Millisecond times are printed with six significant digits."""

	multitrack = make_multitrack([conftest.note_on(1)], ticks_per_beat=480)

	assert "Time msec 1.04167  MSG" in polytrack.text.multitrack_as_text(multitrack)


def test_event_as_text () -> None:

	"""A single event is described with its own tick time."""

	event = conftest.control(42, control=7, value=100)

	assert polytrack.text.event_as_text(event) == " Midi tick 42  MSG control_change channel=0 control=7 value=100 "
