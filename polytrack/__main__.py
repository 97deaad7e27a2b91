import argparse
import logging
import sys
import typing

import yaml

import polytrack.config
import polytrack.midi_file
import polytrack.text
import polytrack.track
import polytrack.transforms


logger = logging.getLogger(__name__)


def build_parser () -> argparse.ArgumentParser:

	"""
	Build the command line parser.
	"""

	parser = argparse.ArgumentParser(prog="polytrack", description="Transform the timing of a MIDI file")
	parser.add_argument("input", help="MIDI file to read")
	parser.add_argument("output", nargs="?", help="MIDI file to write (omit to only inspect the input)")
	parser.add_argument("--config", default="polytrack.yaml", help="YAML file with default options (default: polytrack.yaml)")
	parser.add_argument("--compress", action="store_true", default=None, help="Compress the pause before the first note")
	parser.add_argument("--clip", type=float, metavar="SECONDS", help="Truncate the music to this many seconds")
	parser.add_argument("--prolong", type=int, metavar="TICKS", help="Delay the final events of every track")
	parser.add_argument("--ending-pause", type=int, metavar="TICKS", help="Append a silent note after the end of every track")
	parser.add_argument("--no-running-status", action="store_false", dest="running_status", default=None, help="Write every status byte explicitly")
	parser.add_argument("--text", action="store_true", help="Print the resulting events as text")

	return parser


def merge_options (config: polytrack.config.Config, args: argparse.Namespace) -> polytrack.config.Config:

	"""
	Override config values with the options given on the command line.
	"""

	return polytrack.config.Config(
		compress = config.compress if args.compress is None else args.compress,
		clip_seconds = config.clip_seconds if args.clip is None else args.clip,
		prolong_ticks = config.prolong_ticks if args.prolong is None else args.prolong,
		ending_pause_ticks = config.ending_pause_ticks if args.ending_pause is None else args.ending_pause,
		use_running_status = config.use_running_status if args.running_status is None else args.running_status
	)


def process (multitrack: polytrack.track.MultiTrack, options: polytrack.config.Config) -> polytrack.track.MultiTrack:

	"""
	Apply the selected transforms in order: compress, clip, prolong, ending pause.
	"""

	if options.compress:
		compressed = polytrack.track.MultiTrack()
		polytrack.transforms.compress_start_pause(multitrack, compressed)
		multitrack = compressed
		logger.info("Compressed leading pause")

	if options.clip_seconds is not None:
		clipped = polytrack.track.MultiTrack()
		polytrack.transforms.clip_multitrack(multitrack, clipped, options.clip_seconds)
		multitrack = clipped
		logger.info(f"Clipped to {options.clip_seconds} seconds")

	for track_num, track in enumerate(multitrack):

		if track.is_empty():
			continue

		if options.prolong_ticks is not None:
			polytrack.transforms.last_events_prolongation(multitrack, track_num, options.prolong_ticks)

		if options.ending_pause_ticks is not None:
			if not polytrack.transforms.add_ending_pause(multitrack, track_num, options.ending_pause_ticks):
				logger.warning(f"Could not add an ending pause to track {track_num}")

	return multitrack


def main (argv: typing.Optional[typing.List[str]] = None) -> int:

	"""
	Main entry point for the polytrack command line tool.
	"""

	logging.basicConfig(level=logging.INFO)

	args = build_parser().parse_args(argv)

	try:
		options = merge_options(polytrack.config.load_config(args.config), args)
	except (ValueError, yaml.YAMLError) as e:
		logger.error(f"Invalid options: {e}")
		return 2

	multitrack = polytrack.track.MultiTrack()

	if not polytrack.midi_file.read_midi_file(args.input, multitrack):
		return 1

	multitrack = process(multitrack, options)

	if args.text:
		print(polytrack.text.multitrack_as_text(multitrack), end="")

	if args.output is not None:
		if not polytrack.midi_file.write_midi_file(multitrack, args.output, options.use_running_status):
			return 1

	return 0


if __name__ == "__main__":
	sys.exit(main())
