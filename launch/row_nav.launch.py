"""
Row navigator launch file

Starts the pip-installed row-nav-node with its ROS parameters exposed as
launch arguments. The laser driver and the RosAria base are launched
separately.
"""
from launch import LaunchDescription
from launch.actions import DeclareLaunchArgument, ExecuteProcess
from launch.substitutions import LaunchConfiguration

PARAMETERS = [
    ('scan_topic', '/scan', 'LaserScan input topic'),
    ('cmd_vel_topic', '/RosAria/cmd_vel', 'Twist output topic'),
    ('state_topic', '/RosAria/state_name', 'Navigation state output topic'),
    ('control_rate_hz', '10.0', 'Publish rate in Hz'),
    ('status_interval_sec', '1.0', 'Minimum seconds between status lines'),
    ('full_band_turn_exit', 'false',
     'Require the whole middle third to be clear before finishing a turn'),
]


def generate_launch_description():
    # Declare launch arguments
    launch_args = [
        DeclareLaunchArgument(name, default_value=default, description=description)
        for name, default, description in PARAMETERS
    ]

    # Each parameter becomes "-p name:=value"
    ros_args = ['--ros-args']
    for name, _, _ in PARAMETERS:
        ros_args += ['-p', [name, ':=', LaunchConfiguration(name)]]

    navigator = ExecuteProcess(
        cmd=['row-nav-node'] + ros_args,
        name='row_navigator',
        output='screen',
    )

    return LaunchDescription(launch_args + [navigator])
