import pygame

from evosim.entities import FoodType
from evosim.world import TimeOfDay, ZoneType
from .colors import COLORS

ZONE_COLORS = {
    ZoneType.FERTILE: COLORS['ZONE_FERTILE'],
    ZoneType.HARSH: COLORS['ZONE_HARSH'],
    ZoneType.BARREN: COLORS['ZONE_BARREN'],
    ZoneType.NORMAL: COLORS['ZONE_NORMAL'],
}

FOOD_COLORS = {
    FoodType.BASIC: COLORS['FOOD_BASIC'],
    FoodType.SUPER: COLORS['FOOD_SUPER'],
    FoodType.POISON: COLORS['FOOD_POISON'],
}


def _to_screen(monitor, pos):
    return (int(monitor.world_x + pos.x * monitor.scale),
            int(monitor.world_y + pos.y * monitor.scale))


def draw_world(monitor):
    """Draw zones, obstacles, food and agents into the world rectangle"""
    sim = monitor.sim
    world_rect = pygame.Rect(monitor.world_x, monitor.world_y,
                             int(monitor.cfg.W * monitor.scale), int(monitor.cfg.H * monitor.scale))
    night = sim.environment.time_of_day() is TimeOfDay.NIGHT
    pygame.draw.rect(monitor.screen, COLORS['WORLD_NIGHT'] if night else COLORS['WORLD_DAY'], world_rect)

    # Zones: translucent discs on their own surface
    overlay = pygame.Surface(world_rect.size, pygame.SRCALPHA)
    for zone in sim.zones:
        center = (int(zone.position.x * monitor.scale), int(zone.position.y * monitor.scale))
        color = (*ZONE_COLORS[zone.type], 70)
        pygame.draw.circle(overlay, color, center, int(zone.radius * monitor.scale))
    monitor.screen.blit(overlay, world_rect.topleft)

    for obstacle in sim.obstacles:
        pygame.draw.circle(monitor.screen, COLORS['OBSTACLE'], _to_screen(monitor, obstacle.position),
                           max(2, int(obstacle.size * monitor.scale)))

    for food in sim.foods:
        if food.is_consumed:
            continue
        pygame.draw.circle(monitor.screen, FOOD_COLORS[food.type], _to_screen(monitor, food.position),
                           max(2, int(food.size * monitor.scale)))

    # Agents: species color fill, energy outline, heading tick
    for agent in sim.agents:
        center = _to_screen(monitor, agent.position)
        radius = max(3, int(agent.size * monitor.scale))
        fill = agent.species.color if agent.species is not None else COLORS['ZONE_NORMAL']

        energy_frac = agent.energy / monitor.cfg.MAX_ENERGY
        if energy_frac < 0.33:
            outline = COLORS['ENERGY_LOW']
        elif energy_frac < 0.66:
            outline = COLORS['ENERGY_MID']
        else:
            outline = COLORS['ENERGY_HIGH']

        pygame.draw.circle(monitor.screen, fill, center, radius)
        pygame.draw.circle(monitor.screen, outline, center, radius, 2)
        heading = agent.velocity.normalized()
        if not heading.is_zero():
            tip = (int(center[0] + heading.x * radius * 1.6), int(center[1] + heading.y * radius * 1.6))
            pygame.draw.line(monitor.screen, outline, center, tip, 2)

    pygame.draw.rect(monitor.screen, COLORS['UI_BORDER'], world_rect, 2)
