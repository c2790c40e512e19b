# event_handler.py
import pygame

from evosim.persistence import save
from .colors import COLORS

KEY_ACTIONS = {
    pygame.K_SPACE: "toggle_pause",
    pygame.K_s: "save",
    pygame.K_ESCAPE: "quit",
}


def handle_events(monitor):
    """Drain the pygame queue; returns False once the window should close."""
    for event in pygame.event.get():
        action = None
        if event.type == pygame.QUIT:
            action = "quit"
        elif event.type == pygame.KEYDOWN:
            action = KEY_ACTIONS.get(event.key)
        elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            action = next((b.action for b in monitor.buttons.values() if b.rect.collidepoint(event.pos)), None)
        elif event.type == pygame.MOUSEMOTION:
            monitor.mouse_pos = event.pos

        if action is not None:
            ACTIONS[action](monitor)
            if monitor.should_stop:
                return False
    return True


def _toggle_pause(monitor):
    button = monitor.buttons['pause_play']
    monitor.is_paused = not monitor.is_paused
    if monitor.is_paused:
        monitor.sim.pause()
        button.text, button.color = 'Play', COLORS['UI_PAUSE']
    else:
        monitor.sim.start()
        button.text, button.color = 'Pause', COLORS['UI_BUTTON']


def _save_snapshot(monitor):
    try:
        save(monitor.sim, monitor.save_path)
    except OSError as exc:
        print(f"[ui] SAVE_FAILED path={monitor.save_path} error={exc}")


def _stop(monitor):
    button = monitor.buttons['stop']
    monitor.should_stop = True
    button.text, button.color = 'Stopped', (255, 100, 100)


ACTIONS = {
    "toggle_pause": _toggle_pause,
    "save": _save_snapshot,
    "stop": _stop,
    "quit": _stop,
}
