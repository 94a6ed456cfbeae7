"""
Constants for row navigation.

All decision thresholds are fixed. Distances in meters, speeds in m/s,
turn rates in rad/s.
"""

# =============================================================================
# SCAN BANDS (index ratios, integer division on the sample count)
# =============================================================================
# Index 0 = angle_min, index N-1 = angle_max, center = N/2.
#
#   left third     [0, N/3)
#   middle third   [N/3, 2N/3)
#   right third    [2N/3, N)
#   middle half    [N/4, 3N/4)
# =============================================================================

# =============================================================================
# CRUISE (stage 1)
# =============================================================================

CRUISE_LINEAR = 0.2
CRUISE_ANGULAR = 0.0

# =============================================================================
# ROW CHANGE (stages 2 and 3)
# =============================================================================

# Relative range jump that marks the edge of a row-end pole
POLE_DROP_RATIO = 0.9   # sample < 0.9 * previous = pole start (or end)
POLE_RISE_RATIO = 1.1   # sample > 1.1 * previous = pole end

# Pole start index below this = vehicle is abreast of the post, begin turning
POLE_BEGIN_TURN_INDEX = 25
# Pole start index above this while turning = post left near view, keep turning
POLE_KEEP_TURNING_INDEX = 40

TURN_LINEAR = 0.1
TURN_ANGULAR = -0.25    # Negative = turn right

# Anything closer than this ahead while turning = still facing the old row
TURN_CLEARANCE = 2.0

# =============================================================================
# ROW EDGE AVOIDANCE (stage 4)
# =============================================================================

ROW_EDGE_DISTANCE = 0.4
EDGE_LINEAR = 0.1
EDGE_ANGULAR = 0.2      # Away from the left edge; negated for the right edge

# =============================================================================
# CLOSE OBSTACLE (stage 5)
# =============================================================================

OBSTACLE_STOP_DISTANCE = 0.2

# =============================================================================
# HOST LOOP / TRANSPORT
# =============================================================================

NODE_NAME = "pioneer_laser_node"

SCAN_TOPIC = "/scan"
CMD_VEL_TOPIC = "/RosAria/cmd_vel"
STATE_TOPIC = "/RosAria/state_name"

SCAN_QUEUE_DEPTH = 1
CMD_VEL_QUEUE_DEPTH = 1     # No queue, latest command only
STATE_QUEUE_DEPTH = 2

CONTROL_RATE_HZ = 10.0
STATUS_INTERVAL_SEC = 1.0   # At most one status line per second
