"""Interactive terminal front-end for sshhub.

This package contains the selection menu, the target editor form and
the main menu loop, all rendered through a Terminal implementation.
"""

from sshhub.ui.app import SshHubApp
from sshhub.ui.editor import TargetEditor
from sshhub.ui.menu import MenuController, MenuItem, MenuStatus
from sshhub.ui.terminal import RichTerminal

__all__ = [
    "MenuController",
    "MenuItem",
    "MenuStatus",
    "RichTerminal",
    "SshHubApp",
    "TargetEditor",
]
