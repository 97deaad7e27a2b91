import logging
import struct
import typing

import mido

import polytrack.message
import polytrack.track


logger = logging.getLogger(__name__)


def from_midi_file (mid: mido.MidiFile, dst: polytrack.track.MultiTrack) -> None:

	"""
	Load a mido MidiFile into ``dst``, converting delta times to absolute ticks.

	Each ``end_of_track`` meta message becomes a service event, so the
	length of a trailing silence survives a round trip without ever being
	reported by the sequencer.
	"""

	dst.clear_and_resize(len(mid.tracks))
	dst.ticks_per_beat = mid.ticks_per_beat

	for track_index, midi_track in enumerate(mid.tracks):

		track = dst.get_track(track_index)
		tick = 0

		for message in midi_track:

			tick += message.time

			if message.type == 'end_of_track':
				track.put_event(polytrack.message.Event.service(tick))
			else:
				track.put_event(polytrack.message.Event(time=tick, message=message.copy(time=0)))


def to_midi_file (src: polytrack.track.MultiTrack) -> mido.MidiFile:

	"""
	Build a Type 1 mido MidiFile from the tracks of ``src`` that hold events.

	Service events are written as ``end_of_track``; beat markers are dropped.
	Every written track ends with exactly one ``end_of_track``.
	"""

	mid = mido.MidiFile(type=1, ticks_per_beat=src.ticks_per_beat)

	for track in src:

		if track.is_empty():
			continue

		midi_track = mido.MidiTrack()
		last_tick = 0
		end_tick = 0

		for event in track:

			if event.is_beat_marker():
				continue

			if event.is_service_message():
				end_tick = max(end_tick, event.time)
				continue

			midi_track.append(event.message.copy(time=event.time - last_tick))  # type: ignore[union-attr]
			last_tick = event.time

		midi_track.append(mido.MetaMessage('end_of_track', time=max(end_tick - last_tick, 0)))
		mid.tracks.append(midi_track)

	return mid


def read_midi_file (path: str, dst: polytrack.track.MultiTrack) -> bool:

	"""
	Read a Standard MIDI File into ``dst``.

	Returns False (and logs the reason) if the file cannot be opened or parsed.
	"""

	try:
		mid = mido.MidiFile(path)
	except (OSError, EOFError, ValueError) as e:
		logger.error(f"Failed to read MIDI file {path}: {e}")
		return False

	from_midi_file(mid, dst)

	logger.info(f"Read {path}: {dst.num_tracks} tracks, {dst.num_events()} events, {dst.ticks_per_beat} ticks per beat")

	return True


def write_midi_file (src: polytrack.track.MultiTrack, path: str, use_running_status: bool = True) -> bool:

	"""
	Write the tracks of ``src`` that hold events to a Standard MIDI File.

	Parameters:
		src: The multitrack to write.
		path: Output filename.
		use_running_status: When False, every channel message is written with
			its own status byte.  Some older readers need this.

	Returns False (and logs the reason) if the file cannot be written.
	"""

	mid = to_midi_file(src)

	try:
		if use_running_status:
			mid.save(path)
		else:
			with open(path, 'wb') as f:
				f.write(_encode_without_running_status(mid))
	except (OSError, ValueError) as e:
		logger.error(f"Failed to write MIDI file {path}: {e}")
		return False

	logger.info(f"Saved {path} ({src.num_tracks_with_events()} tracks)")

	return True


def _encode_variable_int (value: int) -> bytes:

	"""Encode an integer as a MIDI variable-length quantity."""

	if value < 0:
		raise ValueError("Variable-length quantity cannot be negative")

	buffer = value & 0x7F
	parts = bytearray()

	while value >> 7:
		value >>= 7
		parts.insert(0, (buffer | 0x80) & 0xFF)
		buffer = value & 0x7F

	parts.insert(0, buffer)

	return bytes(parts)


def _encode_message (message: typing.Union[mido.Message, mido.MetaMessage]) -> bytes:

	if message.type == 'sysex':
		# In a file the length comes after 0xF0 and covers the data plus 0xF7.
		payload = bytes(message.data) + b'\xf7'
		return b'\xf0' + _encode_variable_int(len(payload)) + payload

	return bytes(message.bytes())


def _encode_without_running_status (mid: mido.MidiFile) -> bytes:

	"""
	Serialize ``mid`` with a status byte on every channel message.

	``MidiFile.save()`` always drops repeated status bytes and has no option
	to keep them, and mido's chunk and variable-length writers are private,
	so the file is assembled here from each message's own ``bytes()``.
	"""

	data =bytearray(b'MThd' + struct.pack('>IHHH', 6, mid.type, len(mid.tracks), mid.ticks_per_beat))

	for midi_track in mid.tracks:

		track_data = bytearray()

		for message in midi_track:
			track_data.extend(_encode_variable_int(message.time))
			track_data.extend(_encode_message(message))

		data.extend(b'MTrk' + struct.pack('>I', len(track_data)) + track_data)

	return bytes(data)
