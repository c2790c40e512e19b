import pygame

from evosim.world import TimeOfDay
from .colors import COLORS


def _swatch(screen, kind, color, x, y):
    if kind == 'zone':
        pygame.draw.rect(screen, color, (x, y, 20, 20))
        pygame.draw.rect(screen, COLORS['UI_BORDER'], (x, y, 20, 20), 1)
    elif kind == 'food':
        pygame.draw.circle(screen, color, (x + 10, y + 10), 6)
    else:
        pygame.draw.circle(screen, color, (x + 10, y + 10), 8, 2)


def _panel(monitor, rect):
    pygame.draw.rect(monitor.screen, COLORS['UI_CHART_BG'], rect)
    pygame.draw.rect(monitor.screen, COLORS['UI_BORDER'], rect, 2)


def draw_legend(monitor):
    x, y = monitor.legend['x'], monitor.legend['y']
    _panel(monitor, pygame.Rect(x, y, monitor.legend['width'], 250))
    monitor.screen.blit(monitor.fonts['medium'].render("Map Legend", True, COLORS['UI_TEXT']), (x + 10, y + 10))

    for row, item in enumerate(monitor.legend['items']):
        item_y = y + 40 + row * 25
        _swatch(monitor.screen, item['type'], item['color'], x + 10, item_y)
        label = monitor.fonts['small'].render(item['label'], True, COLORS['UI_TEXT'])
        monitor.screen.blit(label, (x + 40, item_y + 3))


def draw_buttons(monitor):
    for button in monitor.buttons.values():
        hovered = button.rect.collidepoint(monitor.mouse_pos)
        pygame.draw.rect(monitor.screen, button.hover_color if hovered else button.color, button.rect)
        pygame.draw.rect(monitor.screen, COLORS['UI_BORDER'], button.rect, 2)
        text = monitor.fonts['medium'].render(button.text, True, COLORS['UI_TEXT'])
        monitor.screen.blit(text, text.get_rect(center=button.rect.center))


def draw_status(monitor):
    sim = monitor.sim
    rect = pygame.Rect(monitor.world_x, 15, int(monitor.cfg.W * monitor.scale), 36)
    _panel(monitor, rect)

    if monitor.should_stop:
        state, color = "Stopped", COLORS['UI_STOP']
    elif monitor.is_paused:
        state, color = "Paused", COLORS['UI_PAUSE']
    else:
        state, color = "Running", COLORS['UI_BUTTON']

    tod = "Day" if sim.environment.time_of_day() is TimeOfDay.DAY else "Night"
    text = (f"{state} | Generation {sim.generation} | Tick {sim.tick_count}/{monitor.cfg.GEN_TICKS} | "
            f"Population {len(sim.agents)} | Species {len(sim.species_manager.active_species())} | {tod}")
    surf = monitor.fonts['large'].render(text, True, color if monitor.should_stop else COLORS['UI_TEXT'])
    monitor.screen.blit(surf, surf.get_rect(center=rect.center))


def draw_corner_overlay(monitor):
    sim = monitor.sim
    w, h = 190, 80
    x = monitor.world_x + int(monitor.cfg.W * monitor.scale) - w - 10
    y = monitor.world_y + 10
    overlay = pygame.Surface((w, h))
    overlay.set_alpha(200)
    overlay.fill(COLORS['UI_CHART_BG'])
    monitor.screen.blit(overlay, (x, y))
    pygame.draw.rect(monitor.screen, COLORS['UI_BORDER'], (x, y, w, h), 2)

    best = max((a.fitness for a in sim.agents), default=0.0)
    for row, line in enumerate((f"Gen: {sim.generation}", f"Food: {len(sim.foods)}", f"Best: {best:.1f}")):
        monitor.screen.blit(monitor.fonts['medium'].render(line, True, COLORS['UI_TEXT']), (x + 10, y + 10 + row * 20))
