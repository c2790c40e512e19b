import numpy as np
import pygame

from .colors import COLORS

# key, title; the last chart is a histogram of live values
CHART_LAYOUT = [
    ('population', "Population / Gen"),
    ('avg_fitness', "Avg Fitness / Gen"),
    ('max_fitness', "Best Fitness / Gen"),
    ('species', "Active Species / Gen"),
    ('energy_dist', "Energy Dist."),
]


def update_chart_data(monitor):
    """Refresh chart series from the simulation's generation history and live agents"""
    history = monitor.sim.history
    if history:
        charts = monitor.charts
        charts['population'].set_values([h.agent_count for h in history])
        charts['avg_fitness'].set_values([h.avg_fitness for h in history])
        charts['max_fitness'].set_values([h.max_fitness for h in history])
        charts['species'].set_values([h.species_count for h in history])

    energies = [a.energy for a in monitor.sim.agents]
    monitor.charts['energy_dist'].set_values(energies, window=len(energies))


def _frame(monitor, rect, title):
    pygame.draw.rect(monitor.screen, COLORS['UI_CHART_BG'], rect)
    pygame.draw.rect(monitor.screen, COLORS['UI_BORDER'], rect, 2)
    monitor.screen.blit(monitor.fonts['small'].render(title, True, COLORS['UI_TEXT']), (rect.x + 5, rect.y + 5))


def _plot_area(rect):
    # inner area below the title
    return pygame.Rect(rect.x + 10, rect.y + 20, rect.width - 20, rect.height - 40)


def _draw_line_chart(monitor, rect, data, title):
    _frame(monitor, rect, title)
    if len(data.values) < 2:
        return
    area = _plot_area(rect)
    for i in range(5):
        gy = area.y + i * area.height // 4
        pygame.draw.line(monitor.screen, COLORS['UI_CHART_GRID'], (rect.x, gy), (rect.right, gy), 1)

    values = np.asarray(data.values, dtype=float)
    span = data.max_value - data.min_value
    norm = (values - data.min_value) / span if span > 0 else np.full(values.size, 0.5)
    xs = area.x + np.arange(values.size) * area.width / (values.size - 1)
    ys = area.bottom - norm * area.height
    pygame.draw.lines(monitor.screen, data.color, False, list(zip(xs.tolist(), ys.tolist())), 2)


def _draw_histogram(monitor, rect, data, title, bins=10):
    _frame(monitor, rect, title)
    if not data.values or data.max_value == data.min_value:
        return
    area = _plot_area(rect)
    counts, _ = np.histogram(data.values, bins=bins, range=(data.min_value, data.max_value))
    bar_w = area.width // bins
    tallest = int(counts.max()) or 1
    for i, count in enumerate(counts):
        if not count:
            continue
        bar_h = int(count / tallest * area.height)
        bar = pygame.Rect(area.x + i * bar_w, area.bottom - bar_h, bar_w - 1, bar_h)
        pygame.draw.rect(monitor.screen, data.color, bar)
        pygame.draw.rect(monitor.screen, COLORS['UI_BORDER'], bar, 1)


def draw_charts(monitor):
    x = monitor.legend['x']
    y = monitor.legend['y'] + 265
    w, h, gap = monitor.legend['width'], 82, 8
    for row, (key, title) in enumerate(CHART_LAYOUT):
        rect = pygame.Rect(x, y + row * (h + gap), w, h)
        if key == 'energy_dist':
            _draw_histogram(monitor, rect, monitor.charts[key], title)
        else:
            _draw_line_chart(monitor, rect, monitor.charts[key], title)
