"""Render the frames a message would show, one PNG per frame plus the END marker."""

from __future__ import annotations

import argparse
from pathlib import Path
import sys

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from clacks.app import build_alphabet
from clacks.config import DEFAULT_CONFIG_PATH, load_config
from clacks.encoding.alphabet import Alphabet
from clacks.errors import ConfigurationMissing, SubmissionError
from clacks.rendering import FrameData, compose_frame, save_sequence


def main() -> int:
    parser = argparse.ArgumentParser()
    parser.add_argument("message")
    parser.add_argument("--config", default=None, help="Use the alphabet from this config file")
    parser.add_argument("--output-dir", default="emulator_output/preview")
    parser.add_argument("--scale", type=int, default=2)
    args = parser.parse_args()

    try:
        if args.config is not None or Path(DEFAULT_CONFIG_PATH).exists():
            alphabet = build_alphabet(load_config(args.config or DEFAULT_CONFIG_PATH).alphabet)
        else:
            alphabet = Alphabet.default()
        message = alphabet.encode(args.message)
    except (ConfigurationMissing, SubmissionError) as exc:
        print("render_error", str(exc), file=sys.stderr, flush=True)
        return 1

    frames = [*message.parts, alphabet.end_frame]
    images = [compose_frame(FrameData.from_frame(frame), scale=args.scale) for frame in frames]
    paths = save_sequence(images, args.output_dir)
    for frame, path in zip(frames, paths):
        print(f"{path}: {frame}", flush=True)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
