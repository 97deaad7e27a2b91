"""MIDI timing constants.

The multitrack model stores event times as integer ticks relative to a
resolution (ticks per beat).  Millisecond times are derived from the tempo
map, which assumes the MIDI default tempo until the first ``set_tempo``
meta message:

- `DEFAULT_TICKS_PER_BEAT = 480`: resolution given to a fresh MultiTrack
- `DEFAULT_TEMPO = 500000`: microseconds per beat (120 BPM)
- `LOWEST_PITCH = 0`: pitch of the silent note used for ending pauses
"""

DEFAULT_TICKS_PER_BEAT = 480
DEFAULT_TEMPO = 500000

LOWEST_PITCH = 0
DEFAULT_CHANNEL = 0

MS_PER_SECOND = 1000.0
