"""
Utilities Subpackage.

Console logging helpers and file filters shared by the plugin and the CLI.
"""
