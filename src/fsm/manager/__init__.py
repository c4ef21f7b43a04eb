"""
Exports públicos do módulo fsm/manager.
"""

from fsm.manager.machine import VideoStatusMachine, create_video_fsm

__all__ = [
    "VideoStatusMachine",
    "create_video_fsm",
]
