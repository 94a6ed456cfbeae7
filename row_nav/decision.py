"""
Per-scan navigation decision.

Five stages run in a fixed order over one (state, command) value. Each
stage may overwrite what the previous ones decided:

1. cruise                    - baseline forward motion
2. find_row_end_pole         - walk from center toward index 0 looking for a post
3. continue_turn             - keep turning or declare the row change complete
4. avoid_row_edges           - nudge away from a boundary that is too close
5. stop_for_close_obstacle   - halt if anything is right in front (always last)

The decision only depends on the carried-over NavigationState and the scan.
"""

from dataclasses import replace
from functools import partial
from typing import Callable, Tuple

import numpy as np

from .constants import (
    POLE_DROP_RATIO, POLE_RISE_RATIO,
    POLE_BEGIN_TURN_INDEX, POLE_KEEP_TURNING_INDEX,
    TURN_LINEAR, TURN_ANGULAR, TURN_CLEARANCE,
    ROW_EDGE_DISTANCE, EDGE_LINEAR, EDGE_ANGULAR,
    OBSTACLE_STOP_DISTANCE,
)
from .scan import RangeScan, is_valid, valid_mask, left_third, middle_third, right_third, middle_half
from .state import NavigationState, VelocityCommand, Decision, Session

Stage = Callable[[Decision, RangeScan], Decision]

TURN_COMMAND = VelocityCommand(TURN_LINEAR, TURN_ANGULAR)
LEFT_EDGE_COMMAND = VelocityCommand(EDGE_LINEAR, EDGE_ANGULAR)
RIGHT_EDGE_COMMAND = VelocityCommand(EDGE_LINEAR, -EDGE_ANGULAR)


def cruise(current: Decision, scan: RangeScan) -> Decision:
    """Stage 1: drive forward, state unchanged."""
    return Decision(current.state, VelocityCommand.cruise())


def find_row_end_pole(current: Decision, scan: RangeScan) -> Decision:
    """
    Stage 2: look for a row-end pole between the center and index 0.

    A sample more than 10% shorter than its neighbour marks the pole start.
    The next sample that jumps by more than 10% either way marks its end and
    stops the walk. Where the pole starts decides what to do:

    - start index < 25 and not yet turning: begin the row change
    - start index > 40 and already turning: keep turning

    Invalid samples are skipped and never become the comparison basis.
    """
    state, command = current.state, current.command

    basis = scan[scan.center - 1]
    if not is_valid(basis):
        basis = None
    pole_started = False

    for j in range(scan.center, -1, -1):
        sample = scan[j]
        if not is_valid(sample):
            # Dropouts neither end the walk nor become the basis; index 0 is still visited
            continue
        if basis is None:
            basis = sample
            continue

        dropped = sample < POLE_DROP_RATIO * basis
        if dropped and not pole_started:
            pole_started = True
            if j < POLE_BEGIN_TURN_INDEX and state is not NavigationState.CHANGING_ROWS:
                # Abreast of the post, start turning into the next row
                state = NavigationState.CHANGING_ROWS
                command = TURN_COMMAND
            elif j > POLE_KEEP_TURNING_INDEX and state is NavigationState.CHANGING_ROWS:
                command = TURN_COMMAND
        elif dropped or sample > POLE_RISE_RATIO * basis:
            break  # Pole end

        basis = sample

    return Decision(state, command)


def continue_turn(current: Decision, scan: RangeScan, full_band: bool = False) -> Decision:
    """
    Stage 3: while changing rows, keep turning until the way ahead is clear.

    Only the sample at N/3 is checked. With `full_band`, any valid sample in
    the middle third closer than the clearance keeps the turn going.
    """
    if current.state is not NavigationState.CHANGING_ROWS:
        return current

    if full_band:
        ahead = scan.band(middle_third(scan.n))
        blocked = bool(np.any(valid_mask(ahead) & (ahead < TURN_CLEARANCE)))
    else:
        sample = scan[scan.n // 3]
        blocked = is_valid(sample) and sample < TURN_CLEARANCE

    if blocked:
        return Decision(current.state, TURN_COMMAND)
    return Decision(NavigationState.COMPLETED_ROW_CHANGE,
                    replace(current.command, angular_z=0.0))


def avoid_row_edges(current: Decision, scan: RangeScan) -> Decision:
    """
    Stage 4: steer away from a row edge closer than ROW_EDGE_DISTANCE.

    The lowest matching index wins, so a left-third hit always beats a
    right-third one. The middle third is ignored here.
    """
    if current.state is NavigationState.CHANGING_ROWS:
        return current

    with np.errstate(invalid='ignore'):
        close = valid_mask(scan.ranges) & (scan.ranges < ROW_EDGE_DISTANCE)

    start, end = left_third(scan.n)
    if close[start:end].any():
        return Decision(NavigationState.AVOIDING_ROW_EDGES, LEFT_EDGE_COMMAND)

    start, end = right_third(scan.n)
    if close[start:end].any():
        return Decision(NavigationState.AVOIDING_ROW_EDGES, RIGHT_EDGE_COMMAND)

    return current


def stop_for_close_obstacle(current: Decision, scan: RangeScan) -> Decision:
    """Stage 5: stop dead if any valid sample in the middle half is too close."""
    ahead = scan.band(middle_half(scan.n))
    with np.errstate(invalid='ignore'):
        too_close = valid_mask(ahead) & (ahead < OBSTACLE_STOP_DISTANCE)
    if too_close.any():
        return Decision(NavigationState.AVOIDING_UNEXPECTED_OBJECT, VelocityCommand.stop())
    return current


def stages(full_band_turn_exit: bool = False) -> Tuple[Stage, ...]:
    """The decision stages in priority order, lowest first."""
    return (
        cruise,
        find_row_end_pole,
        partial(continue_turn, full_band=full_band_turn_exit),
        avoid_row_edges,
        stop_for_close_obstacle,
    )


def decide(state: NavigationState, scan: RangeScan,
           full_band_turn_exit: bool = False) -> Decision:
    """
    Compute the next state and velocity command for one scan.

    Args:
        state: Navigation state carried over from the previous scan
        scan: Validated scan
        full_band_turn_exit: Check the whole middle third before finishing a turn

    Returns:
        Decision with the next state and a freshly computed command
    """
    decision = Decision(state, VelocityCommand.stop())
    for stage in stages(full_band_turn_exit):
        decision = stage(decision, scan)
    return decision


def step(session: Session, scan: RangeScan, full_band_turn_exit: bool = False) -> Session:
    """
    Advance a session by one scan.

    Returns a new Session; the one passed in is not modified.
    """
    decision = decide(session.state, scan, full_band_turn_exit)
    return replace(session, state=decision.state, command=decision.command)
