from dataclasses import dataclass
from typing import Tuple

import pygame

from .colors import COLORS
from .chart_data import ChartData
from .world_renderer import draw_world
from .chart_renderer import update_chart_data, draw_charts
from .ui_renderer import draw_legend, draw_buttons, draw_status, draw_corner_overlay
from .event_handler import handle_events

WINDOW_SIZE = (1280, 800)
WORLD_ORIGIN = (30, 60)
WORLD_MAX_PX = (880, 620)


@dataclass
class Button:
    rect: pygame.Rect
    text: str
    color: Tuple[int, int, int]
    hover_color: Tuple[int, int, int]
    action: str


class PygameMonitor:
    """Render callback for a Simulation; register with `sim.on_render(monitor.render)`."""

    def __init__(self, sim, cfg, save_path="evosim_snapshot.json"):
        self.sim = sim
        self.cfg = cfg
        self.save_path = save_path

        pygame.init()
        self.width, self.height = WINDOW_SIZE
        self.screen = pygame.display.set_mode(WINDOW_SIZE)
        pygame.display.set_caption("evosim - neuroevolution monitor")
        self.fonts = {name: pygame.font.Font(None, size)
                      for name, size in (("small", 18), ("medium", 22), ("large", 28))}

        # world rectangle, scaled to fit while keeping the aspect ratio
        self.world_x, self.world_y = WORLD_ORIGIN
        self.scale = min(WORLD_MAX_PX[0] / cfg.W, WORLD_MAX_PX[1] / cfg.H)

        self.is_paused = False
        self.should_stop = False
        self.mouse_pos = (0, 0)

        self.charts = {
            "population": ChartData([], 0, 0, (31, 119, 180), "Population"),
            "avg_fitness": ChartData([], 0, 0, (44, 160, 44), "Avg Fitness"),
            "max_fitness": ChartData([], 0, 0, (214, 39, 40), "Best Fitness"),
            "species": ChartData([], 0, 0, (148, 103, 189), "Active Species"),
            "energy_dist": ChartData([], 0, 0, (255, 127, 0), "Energy Distribution"),
        }
        self.buttons = self._make_buttons()
        self.legend = self._make_legend()

        self.fps_clock = pygame.time.Clock()
        self.fps = 60

    def _make_buttons(self):
        specs = [
            ("pause_play", "Pause", COLORS["UI_BUTTON"], COLORS["UI_BUTTON_HOVER"], "toggle_pause"),
            ("save", "Save", COLORS["UI_BUTTON"], COLORS["UI_BUTTON_HOVER"], "save"),
            ("stop", "Stop", COLORS["UI_STOP"], (255, 150, 150), "stop"),
        ]
        w, h, gap = 120, 40, 20
        y = self.height - 60
        return {
            key: Button(pygame.Rect(self.world_x + i * (w + gap), y, w, h), text, color, hover, action)
            for i, (key, text, color, hover, action) in enumerate(specs)
        }

    def _make_legend(self):
        entries = [
            ("zone", "ZONE_FERTILE", "Fertile Zone"),
            ("zone", "ZONE_HARSH", "Harsh Zone"),
            ("zone", "ZONE_BARREN", "Barren Zone"),
            ("food", "FOOD_BASIC", "Basic Food"),
            ("food", "FOOD_SUPER", "Super Food"),
            ("food", "FOOD_POISON", "Poison"),
            ("energy", "ENERGY_LOW", "Low Energy"),
            ("energy", "ENERGY_HIGH", "High Energy"),
        ]
        return {
            "x": self.world_x + int(self.cfg.W * self.scale) + 30,
            "y": 60,
            "width": 300,
            "items": [{"type": kind, "color": COLORS[key], "label": label} for kind, key, label in entries],
        }

    def render(self):
        """Draw one frame; called by the scheduler after each batch of ticks."""
        if not handle_events(self):
            return

        update_chart_data(self)
        self.screen.fill(COLORS["UI_BACKGROUND"])
        for draw in (draw_world, draw_legend, draw_charts, draw_buttons, draw_status, draw_corner_overlay):
            draw(self)
        pygame.display.flip()
        self.fps_clock.tick(self.fps)

    def should_continue(self):
        return not self.should_stop

    def cleanup(self):
        pygame.quit()
