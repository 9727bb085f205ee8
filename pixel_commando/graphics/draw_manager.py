"""
draw_manager.py
---------------
Rectangle-and-text renderer for GameSnapshot frames.

Responsibilities:
- Maintain a layered queue of shapes and text for one frame
- Translate a snapshot into queued draw calls (world scrolled by a camera)
- Render menus and popups as plain labelled boxes
"""

import pygame

from pixel_commando.core.debug.debug_logger import DebugLogger
from pixel_commando.core.runtime.game_settings import Display, World, Progression


# ===========================================================
# Palette
# ===========================================================

SKY = (24, 28, 48)
GROUND = (60, 48, 36)
ENEMY = (200, 60, 60)
BOSS = (150, 30, 120)
PLAYER_BULLET = (255, 230, 90)
ENEMY_BULLET = (255, 120, 40)
TEXT = (255, 255, 255)
DIM_TEXT = (150, 150, 150)
HIGHLIGHT = (255, 210, 0)
PANEL = (20, 20, 20)

LAYER_WORLD = 0
LAYER_HUD = 1
LAYER_POPUP = 2


class DrawManager:
    """Queues and renders one frame at a time."""

    # ===========================================================
    # Initialization
    # ===========================================================

    def __init__(self):
        self.shape_layers = {}   # {layer: [("rect"|"text", ...), ...]}
        self._fonts = {}
        DebugLogger.init_entry("DrawManager")

    def clear(self):
        self.shape_layers.clear()

    # ===========================================================
    # Queueing
    # ===========================================================

    def queue_rect(self, rect, color, layer=LAYER_WORLD, width=0):
        self.shape_layers.setdefault(layer, []).append(("rect", tuple(rect), color, width))

    def queue_text(self, text, pos, color=TEXT, size=24, layer=LAYER_HUD):
        self.shape_layers.setdefault(layer, []).append(("text", str(text), tuple(pos), color, size))

    def _font(self, size):
        font = self._fonts.get(size)
        if font is None:
            font = self._fonts[size] = pygame.font.SysFont("arial", size, bold=True)
        return font

    # ===========================================================
    # Snapshot Translation
    # ===========================================================

    @staticmethod
    def camera_x(player_x: float) -> float:
        """Scroll so the player sits a third of the way across, within the level."""
        return max(0, min(player_x - Display.WIDTH / 3, World.LEVEL_WIDTH - Display.WIDTH))

    def draw_snapshot(self, snap):
        """Queue everything visible in a GameSnapshot."""
        self.clear()
        if snap.state in ("play", "pause", "win", "gameOver"):
            self._draw_world(snap)
            self._draw_hud(snap)
        if snap.state == "home":
            self._draw_menu("PIXEL COMMANDO", Progression.HOME_MENU, snap.menu_index, snap)
        elif snap.state == "levelSelect":
            self._draw_level_select(snap)
        elif snap.state == "shop":
            self._draw_shop(snap)
        elif snap.state == "pause":
            self._draw_popup("PAUSED", ("RESUME", "RESTART", "HOME"), snap.menu_index)
        elif snap.state == "win":
            ad_label = "CLAIMED" if snap.win_ad_claimed else f"AD +{Progression.WIN_BASE_REWARD}"
            self._draw_popup("LEVEL CLEAR", ("NEXT", ad_label, "HOME"), snap.menu_index)
        elif snap.state == "gameOver":
            self._draw_popup("GAME OVER", ("RETRY", "REVIVE (AD)", "HOME"), snap.menu_index)

        self.queue_text("MUTED" if snap.muted else "SOUND", (Display.WIDTH - 110, 18), DIM_TEXT, 18)
        if snap.ad_busy:
            self.queue_text("AD...", (Display.WIDTH - 110, 40), HIGHLIGHT, 18)

    def _draw_world(self, snap):
        cam = self.camera_x(snap.player.x)
        self.queue_rect((0, World.GROUND_Y, Display.WIDTH, Display.HEIGHT - World.GROUND_Y), GROUND)
        end_x = World.LEVEL_WIDTH - World.END_ZONE_DISTANCE - cam
        self.queue_rect((end_x, 0, 4, World.GROUND_Y), DIM_TEXT)

        for enemy in snap.enemies:
            self._queue_entity(enemy, ENEMY, cam)
        if snap.boss is not None:
            self._queue_entity(snap.boss, BOSS, cam)
        for bullet in snap.bullets:
            self._queue_entity(bullet, PLAYER_BULLET, cam)
        for bullet in snap.enemy_bullets:
            self._queue_entity(bullet, ENEMY_BULLET, cam)

        player = snap.player
        # Blink while invincible
        if player.invincible % 10 < 6:
            color = Progression.CHARACTERS[snap.progress.selected_char][1]
            self._queue_entity(player, color, cam)

    def _queue_entity(self, view, color, cam):
        self.queue_rect((view.x - cam, view.y, view.w, view.h), color)

    def _draw_hud(self, snap):
        player = snap.player
        self.queue_text(f"STAGE {snap.stage}-{snap.level_in_stage}", (20, 12))
        self.queue_text(f"COINS {snap.progress.coins}", (20, 40), HIGHLIGHT)

        bar_w = 200
        ratio = max(0, player.health) / player.max_health if player.max_health else 0
        self.queue_rect((20, 70, bar_w, 14), PANEL, LAYER_HUD)
        self.queue_rect((20, 70, int(bar_w * ratio), 14), (80, 220, 80), LAYER_HUD)

        if snap.boss is not None and snap.boss.max_health:
            boss_ratio = max(0, snap.boss.health) / snap.boss.max_health
            self.queue_rect((Display.WIDTH / 2 - 150, 20, 300, 12), PANEL, LAYER_HUD)
            self.queue_rect((Display.WIDTH / 2 - 150, 20, int(300 * boss_ratio), 12), BOSS, LAYER_HUD)

    def _draw_menu(self, title, options, index, snap):
        self.queue_text(title, (Display.WIDTH / 2 - 160, 90), TEXT, 48)
        self.queue_text(f"COINS {snap.progress.coins}", (20, 12), HIGHLIGHT)
        for i, label in enumerate(options):
            color = HIGHLIGHT if i == index else TEXT
            self.queue_text(label, (Display.WIDTH / 2 - 50, 220 + i * 60), color, 32)

    def _draw_level_select(self, snap):
        self.queue_text(f"< STAGE {snap.selected_stage} >", (Display.WIDTH / 2 - 100, 150), TEXT, 36)
        first = (snap.selected_stage - 1) * World.LEVELS_PER_STAGE + 1
        for i in range(World.LEVELS_PER_STAGE):
            level = first + i
            x = 260 + (i % 5) * 120
            y = 220 + (i // 5) * 100
            unlocked = level <= snap.progress.unlocked_level
            border = HIGHLIGHT if level == snap.selected_level else (TEXT if unlocked else DIM_TEXT)
            self.queue_rect((x, y, 80, 60), border, LAYER_HUD, width=2)
            self.queue_text(str(i + 1), (x + 28, y + 16), border, 24)

    def _draw_shop(self, snap):
        self.queue_text("SHOP", (Display.WIDTH / 2 - 50, 90), TEXT, 48)
        self.queue_text(f"COINS {snap.progress.coins}", (20, 12), HIGHLIGHT)
        for i, (name, color, price) in enumerate(Progression.CHARACTERS):
            x = 150 + i * 160
            self.queue_rect((x + 30, 240, 55, 75), color, LAYER_HUD)
            owned = snap.progress.unlocked_chars[i]
            if i == snap.progress.selected_char:
                status = "EQUIPPED"
            else:
                status = "OWNED" if owned else str(price)
            label_color = HIGHLIGHT if i == snap.shop_index else TEXT
            self.queue_rect((x, 215, 120, 185), label_color, LAYER_HUD, width=2)
            self.queue_text(name, (x + 6, 330), label_color, 16)
            self.queue_text(status, (x + 6, 360), label_color, 16)

    def _draw_popup(self, title, options, index):
        self.queue_rect((230, 150, 500, 200), PANEL, LAYER_POPUP)
        self.queue_text(title, (Display.WIDTH / 2 - 90, 180), TEXT, 36, LAYER_POPUP)
        for i, label in enumerate(options):
            x = 245 + i * 165
            color = HIGHLIGHT if i == index else TEXT
            self.queue_rect((x, 280, 140, 44), color, LAYER_POPUP, width=2)
            self.queue_text(label, (x + 10, 292), color, 18, LAYER_POPUP)

    # ===========================================================
    # Rendering
    # ===========================================================

    def render(self, surface):
        """Flush the queued frame onto a pygame surface, lowest layer first."""
        surface.fill(SKY)
        for layer in sorted(self.shape_layers):
            for item in self.shape_layers[layer]:
                if item[0] == "rect":
                    _, rect, color, width = item
                    pygame.draw.rect(surface, color, pygame.Rect(rect), width)
                else:
                    _, text, pos, color, size = item
                    surface.blit(self._font(size).render(text, True, color), pos)
