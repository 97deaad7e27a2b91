import dataclasses
import enum
import typing

import mido


MessageType = typing.Union[mido.Message, mido.MetaMessage]


class EventKind (enum.Enum):

	"""
	What an event carries.
	"""

	MIDI = "midi"
	SERVICE = "service"
	BEAT_MARKER = "beat_marker"


@dataclasses.dataclass
class Event:

	"""
	A MIDI message stamped with an absolute tick time.

	Service events are bookkeeping (for example the end of a track) and are
	never handed out by the sequencer.  Beat markers are synthesized by the
	sequencer and never stored in a track.
	"""

	time: int
	message: typing.Optional[MessageType] = None
	kind: EventKind = EventKind.MIDI

	def __post_init__ (self) -> None:
		if self.time < 0:
			raise ValueError("Event time cannot be negative")
		if self.kind is EventKind.MIDI and self.message is None:
			raise ValueError("MIDI events need a message")


	@staticmethod
	def note_on (time: int, pitch: int, channel: int, velocity: int) -> "Event":

		"""
		Create a note-on event.  A velocity of 0 makes it a note-off by convention.
		"""

		return Event(time=time, message=mido.Message('note_on', channel=channel, note=pitch, velocity=velocity))


	@staticmethod
	def service (time: int) -> "Event":

		"""Create a service event."""

		return Event(time=time, kind=EventKind.SERVICE)


	@staticmethod
	def beat_marker (time: int) -> "Event":

		"""Create a beat marker event."""

		return Event(time=time, kind=EventKind.BEAT_MARKER)


	def copy (self, time: typing.Optional[int] = None) -> "Event":

		"""
		Return an independent copy, optionally re-stamped with a new time.
		"""

		message = self.message.copy() if self.message is not None else None

		return Event(
			time = self.time if time is None else time,
			message = message,
			kind = self.kind
		)


	def is_service_message (self) -> bool:
		return self.kind is EventKind.SERVICE


	def is_beat_marker (self) -> bool:
		return self.kind is EventKind.BEAT_MARKER


	def is_note_on (self) -> bool:

		"""True for any note-on message, including velocity 0."""

		return self.kind is EventKind.MIDI and self.message is not None and self.message.type == 'note_on'


	def is_note_on_with_zero_velocity (self) -> bool:
		return self.is_note_on() and self.message.velocity == 0  # type: ignore[union-attr]


	def is_tempo_change (self) -> bool:
		return self.kind is EventKind.MIDI and self.message is not None and self.message.type == 'set_tempo'


	def describe (self) -> str:

		"""
		Describe the payload as text, e.g. ``note_on channel=0 note=60 velocity=64``.

		The message's own delta ``time`` attribute is left out; the event's
		absolute tick time is reported by the caller.
		"""

		if self.kind is EventKind.SERVICE:
			return "service"

		if self.kind is EventKind.BEAT_MARKER:
			return "beat marker"

		fields = self.message.dict()  # type: ignore[union-attr]
		message_type = fields.pop('type')
		fields.pop('time', None)

		parts = [message_type] + [f"{name}={value}" for name, value in fields.items()]

		return " ".join(parts)
