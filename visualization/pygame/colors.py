COLORS = {
    # World background by time of day
    'WORLD_DAY': (236, 240, 228),     # Pale green-gray
    'WORLD_NIGHT': (58, 64, 82),      # Slate blue

    # Zones (drawn as translucent discs)
    'ZONE_FERTILE': (120, 200, 90),   # Green
    'ZONE_HARSH': (214, 90, 60),      # Rust
    'ZONE_BARREN': (190, 170, 120),   # Sand
    'ZONE_NORMAL': (160, 160, 160),   # Gray

    # Food
    'FOOD_BASIC': (136, 170, 255),    # #88aaff
    'FOOD_SUPER': (255, 170, 0),      # #ffaa00
    'FOOD_POISON': (170, 0, 170),     # #aa00aa

    # Obstacles
    'OBSTACLE': (85, 85, 85),         # #555555

    # Agent energy levels (outline)
    'ENERGY_LOW': (68, 1, 84),        # Dark purple
    'ENERGY_MID': (59, 82, 139),      # Blue
    'ENERGY_HIGH': (253, 231, 37),    # Yellow

    # UI elements
    'UI_BACKGROUND': (245, 245, 245), # Light gray
    'UI_BORDER': (200, 200, 200),     # Medium gray
    'UI_TEXT': (50, 50, 50),          # Dark gray
    'UI_BUTTON': (100, 149, 237),     # Cornflower blue
    'UI_BUTTON_HOVER': (70, 130, 180), # Steel blue
    'UI_PAUSE': (144, 238, 144),       # Light green
    'UI_STOP': (255, 182, 193),        # Light pink
    'UI_CHART_BG': (255, 255, 255),    # White
    'UI_CHART_GRID': (230, 230, 230),  # Light gray
}
