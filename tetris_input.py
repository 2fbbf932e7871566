
"""Raw key -> abstract action mapping"""
from typing import Optional, Tuple
import pygame
from tetris import UserAction

KEYMAP = {
    pygame.K_RETURN: UserAction.START,
    pygame.K_KP_ENTER: UserAction.START,
    pygame.K_p: UserAction.PAUSE,
    pygame.K_q: UserAction.TERMINATE,
    pygame.K_LEFT: UserAction.LEFT,
    pygame.K_RIGHT: UserAction.RIGHT,
    pygame.K_UP: UserAction.UP,
    pygame.K_DOWN: UserAction.DOWN,
    pygame.K_SPACE: UserAction.ACTION,
}

def map_key(key: int) -> Tuple[Optional[UserAction], bool]:
    """Return (action, hold). Down is always a held drop; unknown keys give (None, False)."""
    action = KEYMAP.get(key)
    return action, action == UserAction.DOWN

def map_event(e) -> Tuple[Optional[UserAction], bool]:
    if e.type != pygame.KEYDOWN:
        return None, False
    return map_key(e.key)
