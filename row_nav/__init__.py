"""
Row navigation for a LiDAR-equipped field vehicle.

Modules:
- scan: scan geometry, validity and index bands
- decision: five-stage per-scan decision (cruise, row-end pole, turn, row edges, close obstacle)
- reporting: throttled status announcements
- recording: recorded scan sessions for offline replay
- main: replay CLI
- ros_interface: rclpy node (needs a ROS 2 installation, not imported here)
"""

from .constants import *
from .state import NavigationState, VelocityCommand, Decision, Session
from .scan import RangeScan, InvalidScanError
from .decision import decide, step
from .reporting import StatusReporter

__all__ = [
    'NavigationState',
    'VelocityCommand',
    'Decision',
    'Session',
    'RangeScan',
    'InvalidScanError',
    'decide',
    'step',
    'StatusReporter',
]
