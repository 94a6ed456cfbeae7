"""
Offline replay of recorded LiDAR sessions through the row navigator.

Runs every recorded scan through the same decision and status throttle as
the live node, without ROS.
"""

import os
import sys
import json
import argparse
from collections import Counter
from typing import Optional, TextIO

from .constants import CONTROL_RATE_HZ, STATUS_INTERVAL_SEC
from .decision import step
from .recording import RecordingError, resolve_scan_path, iter_frames, load_metadata
from .reporting import StatusReporter
from .scan import RangeScan, InvalidScanError
from .state import NavigationState, Session


class ReplayResult:
    """Counters collected over one replay."""

    def __init__(self):
        self.processed = 0
        self.rejected = 0
        self.states: Counter = Counter()
        self.session = Session()

    def summary(self) -> str:
        lines = [f"[REPLAY] Scans processed: {self.processed}, rejected: {self.rejected}"]
        for state in NavigationState:
            if self.states[state]:
                lines.append(f"[REPLAY]   {state.label:<28} {self.states[state]}")
        return "\n".join(lines)


def replay(path: str, rate_hz: float = CONTROL_RATE_HZ,
           full_band_turn_exit: bool = False,
           output: Optional[TextIO] = None,
           quiet: bool = False) -> ReplayResult:
    """
    Replay one scans file.

    Args:
        path: scans.jsonl or scans.jsonl.gz
        rate_hz: Rate the scans were taken at (one control tick per scan)
        full_band_turn_exit: Check the whole middle third before finishing a turn
        output: Optional stream for one JSON line per processed scan
        quiet: Suppress status lines and per-scan warnings

    Returns:
        ReplayResult with counters and the final session

    Raises:
        RecordingError: file missing or unreadable
    """
    result = ReplayResult()
    emit = (lambda _: None) if quiet else (lambda label: print(f"[STATE] {label}"))
    reporter = StatusReporter.for_rate(rate_hz, STATUS_INTERVAL_SEC, emit=emit)

    for index, frame in enumerate(iter_frames(path)):
        try:
            scan = RangeScan.from_dict(frame)
        except InvalidScanError as e:
            result.rejected += 1
            if not quiet:
                print(f"[WARN] Scan {index} rejected: {e}")
        else:
            result.session = step(result.session, scan, full_band_turn_exit)
            result.processed += 1
            result.states[result.session.state] += 1

            if output is not None:
                linear_x, angular_z = result.session.command.as_tuple()
                output.write(json.dumps({
                    'index': index,
                    'timestamp': frame.get('timestamp'),
                    'state': result.session.state.label,
                    'linear_x': linear_x,
                    'angular_z': angular_z,
                }) + "\n")

        reporter.tick(result.session)

    return result


def main(argv=None):
    """Entry point for row-nav-replay."""
    parser = argparse.ArgumentParser(
        description='Replay recorded LiDAR scans through the row navigator',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  row-nav-replay ./exploration_20241215_143022
  row-nav-replay scans.jsonl.gz --output decisions.jsonl
  row-nav-replay ./data --rate 5 --full-band-turn-exit
        """
    )
    parser.add_argument('data', type=str,
                        help='Session directory or scans.jsonl[.gz] file')
    parser.add_argument('--rate', '-r', type=float, default=CONTROL_RATE_HZ,
                        help=f'Scan rate in Hz (default: {CONTROL_RATE_HZ:g})')
    parser.add_argument('--output', '-o', type=str, default=None,
                        help='Write one JSON line per processed scan to this file')
    parser.add_argument('--full-band-turn-exit', action='store_true',
                        help='Require the whole middle third to be clear before finishing a turn')
    parser.add_argument('--quiet', '-q', action='store_true',
                        help='Only print the summary')
    args = parser.parse_args(argv)

    if args.rate <= 0:
        parser.error("--rate must be positive")

    try:
        path = resolve_scan_path(args.data)
        metadata = load_metadata(args.data) if os.path.isdir(args.data) else {}
    except RecordingError as e:
        print(f"[ERROR] {e}")
        return 1

    if metadata:
        print(f"[REPLAY] Session: {metadata.get('session_id', 'unknown')}")
    print(f"[REPLAY] Reading {path}")

    try:
        output = open(args.output, 'w') if args.output else None
    except OSError as e:
        print(f"[ERROR] Cannot write {args.output}: {e.strerror}")
        return 1

    try:
        result = replay(path, rate_hz=args.rate,
                        full_band_turn_exit=args.full_band_turn_exit,
                        output=output, quiet=args.quiet)
    except RecordingError as e:
        print(f"[ERROR] {e}")
        return 1
    finally:
        if output is not None:
            output.close()

    print(result.summary())
    print(f"[REPLAY] Final state: {result.session.state.label}")
    return 0


if __name__ == '__main__':
    sys.exit(main())
