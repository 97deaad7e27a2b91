"""
Polytrack - chronological processing of multitrack MIDI event streams.

A ``MultiTrack`` holds several independently time-ordered tracks of events
stamped in ticks.  The ``Sequencer`` merges them into one stream in playback
order, reporting every event in both ticks and milliseconds, and the
transforms build on it:

- **Leading-pause compression.** ``compress_start_pause()`` squeezes the
  silence and set-up messages before the first sounding note down to one
  tick per distinct time point, keeping chords together.
- **Clipping.** ``clip_multitrack()`` truncates the music to a duration in
  seconds, following tempo changes.
- **Tail prolongation.** ``last_events_prolongation()`` delays the final
  events of a track together.
- **Ending pause.** ``add_ending_pause()`` appends a silent note so a track
  does not end abruptly.
- **Text trace.** ``multitrack_as_text()`` lists every event with its track,
  tick and millisecond time.

Standard MIDI Files are read and written through mido:

    ```python
    import polytrack

    mt = polytrack.MultiTrack()
    if polytrack.read_midi_file("song.mid", mt):
        out = polytrack.MultiTrack()
        polytrack.compress_start_pause(mt, out)
        polytrack.write_midi_file(out, "song_tight.mid")
    ```

The same operations are available from the command line with
``python -m polytrack``.
"""

import polytrack.message
import polytrack.midi_file
import polytrack.sequencer
import polytrack.text
import polytrack.track
import polytrack.transforms


Event = polytrack.message.Event
MultiTrack = polytrack.track.MultiTrack
Track = polytrack.track.Track
Sequencer = polytrack.sequencer.Sequencer

read_midi_file = polytrack.midi_file.read_midi_file
write_midi_file = polytrack.midi_file.write_midi_file

compress_start_pause = polytrack.transforms.compress_start_pause
clip_multitrack = polytrack.transforms.clip_multitrack
last_events_prolongation = polytrack.transforms.last_events_prolongation
add_ending_pause = polytrack.transforms.add_ending_pause

multitrack_as_text = polytrack.text.multitrack_as_text
event_as_text = polytrack.text.event_as_text
