"""
Command-line entry point.

    wavepcm info    IN
    wavepcm split   IN OUT_PREFIX
    wavepcm mono    IN OUT
    wavepcm extract IN OUT --start-ms N --length-ms N
    wavepcm convert IN OUT --bits {8,16}

Exit codes: 0 ok, 1 codec or file error, 2 usage error (argparse).
JSONL events go to stderr so stdout carries only command output.
"""

from __future__ import annotations

import argparse
import json
import sys
from typing import Sequence

from wavepcm.audio import transforms
from wavepcm.audio.files import load, save
from wavepcm.config import CodecConfig
from wavepcm.errors import WaveError
from wavepcm.observability import logger
from wavepcm.observability.logger import log_event


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="wavepcm", description="PCM WAVE codec tools")
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("info", help="print format and length of a WAVE file")
    p.add_argument("input")

    p = sub.add_parser("split", help="write one mono file per channel")
    p.add_argument("input")
    p.add_argument("out_prefix")

    p = sub.add_parser("mono", help="downmix to one channel")
    p.add_argument("input")
    p.add_argument("output")

    p = sub.add_parser("extract", help="cut a time range")
    p.add_argument("input")
    p.add_argument("output")
    p.add_argument("--start-ms", type=int, required=True)
    p.add_argument("--length-ms", type=int, required=True)

    p = sub.add_parser("convert", help="change bit depth")
    p.add_argument("input")
    p.add_argument("output")
    p.add_argument("--bits", type=int, choices=(8, 16), required=True)

    return parser


def _run(args: argparse.Namespace, config: CodecConfig) -> None:
    buffer = load(args.input, strict=config.strict_header)

    if args.command == "info":
        print(json.dumps({
            "path": args.input,
            "sampling_rate": buffer.sampling_rate,
            "bits_per_sample": buffer.bits_per_sample,
            "channels": buffer.channels,
            "frame_count": buffer.frame_count,
            "duration_ms": buffer.duration_ms,
        }))
        return

    if args.command == "split":
        for c, part in enumerate(transforms.split(buffer)):
            save(part, f"{args.out_prefix}.ch{c}.wav")
        return

    if args.command == "mono":
        result = transforms.to_monaural(buffer)
    elif args.command == "extract":
        result = transforms.extract(buffer, args.start_ms, args.length_ms)
    else:
        result = transforms.convert_bit_depth(buffer, args.bits)

    save(result, args.output)


def main(argv: Sequence[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)
    config = CodecConfig.load_from_env()
    logger.configure(enabled=config.enable_json_logs, to_stderr=True)

    try:
        _run(args, config)
    except (WaveError, ValueError, OSError) as e:
        log_event({
            "event_type": "cli_error",
            "command": args.command,
            "error_type": type(e).__name__,
            "error": str(e),
        })
        print(f"wavepcm: {e}", file=sys.stderr)
        return 1

    return 0
