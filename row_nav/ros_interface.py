"""
ROS 2 node running the row navigator.

Subscribes to LaserScan, runs the decision on every scan, and publishes the
latest velocity command and state name at a fixed rate. Scan callbacks and
timer ticks share the default single-threaded executor, so they never
interleave and the Session needs no lock.
"""

import rclpy
from rclpy.executors import ExternalShutdownException
from rclpy.node import Node
from rclpy.signals import SignalHandlerOptions
from geometry_msgs.msg import Twist
from sensor_msgs.msg import LaserScan
from std_msgs.msg import String

from .constants import (
    NODE_NAME, SCAN_TOPIC, CMD_VEL_TOPIC, STATE_TOPIC,
    SCAN_QUEUE_DEPTH, CMD_VEL_QUEUE_DEPTH, STATE_QUEUE_DEPTH,
    CONTROL_RATE_HZ, STATUS_INTERVAL_SEC,
)
from .decision import step
from .reporting import StatusReporter
from .scan import RangeScan, InvalidScanError
from .state import Session, VelocityCommand


def to_twist(command: VelocityCommand) -> Twist:
    msg = Twist()
    msg.linear.x = float(command.linear_x)
    msg.angular.z = float(command.angular_z)
    return msg


class RowNavigatorNode(Node):
    def __init__(self, node_name: str = NODE_NAME) -> None:
        super().__init__(node_name)

        scan_topic = self.declare_parameter('scan_topic', SCAN_TOPIC).value
        cmd_vel_topic = self.declare_parameter('cmd_vel_topic', CMD_VEL_TOPIC).value
        state_topic = self.declare_parameter('state_topic', STATE_TOPIC).value

        self.control_rate_hz = float(self.declare_parameter('control_rate_hz', CONTROL_RATE_HZ).value)
        self.status_interval_sec = float(
            self.declare_parameter('status_interval_sec', STATUS_INTERVAL_SEC).value
        )
        self.full_band_turn_exit = bool(self.declare_parameter('full_band_turn_exit', False).value)

        if self.control_rate_hz <= 0.0:
            self.get_logger().warning(
                f"Invalid control_rate_hz {self.control_rate_hz}; using {CONTROL_RATE_HZ}."
            )
            self.control_rate_hz = CONTROL_RATE_HZ

        self.session = Session()
        self.reporter = StatusReporter.for_rate(
            self.control_rate_hz, self.status_interval_sec, emit=self.get_logger().info
        )
        self.rejected_scans = 0

        self.vel_pub = self.create_publisher(Twist, cmd_vel_topic, CMD_VEL_QUEUE_DEPTH)
        self.state_pub = self.create_publisher(String, state_topic, STATE_QUEUE_DEPTH)
        self.create_subscription(LaserScan, scan_topic, self._on_scan, SCAN_QUEUE_DEPTH)
        self.create_timer(1.0 / self.control_rate_hz, self._on_timer)

        self.get_logger().info(
            f"Row navigator ready: scan={scan_topic} cmd_vel={cmd_vel_topic} "
            f"state={state_topic} rate={self.control_rate_hz:g}Hz"
        )

    def _on_scan(self, msg: LaserScan) -> None:
        try:
            scan = RangeScan.from_msg(msg)
        except InvalidScanError as e:
            # Keep the previous state and command
            self.rejected_scans += 1
            self.get_logger().warning(f"Scan rejected: {e}", throttle_duration_sec=1.0)
            return
        self.session = step(self.session, scan, self.full_band_turn_exit)

    def _on_timer(self) -> None:
        self.reporter.tick(self.session)
        self.publish()

    def publish(self) -> None:
        self.vel_pub.publish(to_twist(self.session.command))
        self.state_pub.publish(String(data=self.session.state.label))

    def shutdown(self) -> None:
        self.vel_pub.publish(to_twist(VelocityCommand.stop()))


def main(args=None) -> None:
    # Ctrl+C raises KeyboardInterrupt in spin and leaves the context valid
    # for the final stop command
    rclpy.init(args=args, signal_handler_options=SignalHandlerOptions.NO)
    node = RowNavigatorNode()
    try:
        rclpy.spin(node)
    except (KeyboardInterrupt, ExternalShutdownException):
        pass
    finally:
        if rclpy.ok():
            node.shutdown()
        node.destroy_node()
        if rclpy.ok():
            rclpy.shutdown()


if __name__ == '__main__':
    main()
