import io

import polytrack.message
import polytrack.sequencer
import polytrack.track


def multitrack_as_text (multitrack: polytrack.track.MultiTrack) -> str:

	"""
	Render every event of a multitrack as a diagnostic trace.

	One line per event in playback order, giving its track, tick time,
	millisecond time and message.  Beat markers are left out.
	"""

	sequencer = polytrack.sequencer.Sequencer(multitrack)
	sequencer.seek_to_start()

	out = io.StringIO()
	out.write(f"Clocks per beat  {multitrack.ticks_per_beat}\n\n")

	while True:

		item = sequencer.next_event()

		if item is None:
			break

		track_index, event = item

		if event.is_beat_marker():
			continue

		out.write(
			f"Track {track_index}"
			f"  Midi tick {sequencer.current_tick_time}"
			f"  Time msec {sequencer.current_time_ms:g}"
			f"  MSG {event.describe()}\n"
		)

	out.write("\n")

	return out.getvalue()


def event_as_text (event: polytrack.message.Event) -> str:

	"""Describe a single event with its tick time."""

	return f" Midi tick {event.time}  MSG {event.describe()} "
