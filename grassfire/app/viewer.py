# grassfire/app/viewer.py
#!/usr/bin/env python3
"""
Grassfire Viewer — steps the wavefront one layer at a time

- Keyboard:
    [1]/[2]/[3]  -> switch bundled map
    [G]          -> new random grid
    [SPACE]      -> run/pause
    [N]          -> single step
    [R]          -> reset
    [+]/[-]      -> steps/sec
    [Q]/[ESC]    -> quit

Cells show their layer number while the wave spreads; after reconstruction
only the kept path keeps its numbers.
"""

import sys, time
from typing import List, Tuple, Optional, Dict

import pygame

from grassfire.config import Settings, MAP_DIR
from grassfire.core.types import Grid, Cell, Obstacle, Destination, Layer
from grassfire.core.generator import random_grid
from grassfire.core.grassfire import GrassfireAlgo
from grassfire.app.maps import load_map

# ---------- Config ----------
MAP_FILES = {
    "01_corridor": MAP_DIR / "01_corridor.json",
    "02_open_field": MAP_DIR / "02_open_field.json",
    "03_walled_off": MAP_DIR / "03_walled_off.json",
}
PANEL_W = 320            # right band: metrics + buttons
GRID_MARGIN = 16
CELL_SIZE_DEFAULT = 24
FONT_NAME = None  # default pygame font

# Colors
WHITE       = (255,255,255)
BLACK       = (  0,  0,  0)
BLUE        = ( 70,130,180)
RED         = (220, 50, 47)
FREE_GRAY   = (200,200,200)
OBSTACLE_C  = ( 40, 40, 46)
WAVE_CYAN   = (120,200,255)
NEON_MINT   = (0,255,200)
FRONT_GOLD_A = (255,210,0,110)

CARD_BG     = (24,28,36,220)
CARD_HI     = (255,255,255,18)
TEXT_LIGHT  = (230,235,240)
ACCENT_GOLD = (255,210,0)


def front_cells(grid: Grid, opened) -> List[Cell]:
    """Newly stamped cells that still hold a layer, in row-major order."""
    return [c for c, s in grid.scan() if c in opened and isinstance(s, Layer)]


# ---------- Simple UI Button ----------
class UIButton:
    def __init__(self, label: str, rect: pygame.Rect, callback, *, togglable: bool = False):
        self.label = label
        self.rect = rect
        self.callback = callback
        self.hover = False
        self.togglable = togglable
        self.active = False

    def set_active(self, value: bool):
        self.active = bool(value)

    def draw(self, screen: pygame.Surface, font: pygame.font.Font):
        base = pygame.Surface(self.rect.size, pygame.SRCALPHA)
        bg_idle   = (36, 40, 48, 220)
        bg_hover  = (46, 50, 60, 230)
        bg_active = (58, 86, 160, 235)

        if self.active and self.togglable:
            bg = bg_active
        elif self.hover:
            bg = bg_hover
        else:
            bg = bg_idle
        pygame.draw.rect(base, bg, base.get_rect(), border_radius=10)
        screen.blit(base, self.rect.topleft)

        if self.active and self.togglable:
            pygame.draw.rect(screen, (120, 170, 255, 255), self.rect, width=2, border_radius=10)

        text = font.render(self.label, True, (235,238,242))
        screen.blit(text, text.get_rect(center=self.rect.center))

    def handle_mouse(self, event: pygame.event.Event):
        if event.type == pygame.MOUSEMOTION:
            self.hover = self.rect.collidepoint(event.pos)
        elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            if self.rect.collidepoint(event.pos):
                self.callback()


# ---------- Viewer ----------
class Viewer:
    def __init__(self, grid: Grid, settings: Optional[Settings] = None):
        pygame.init()

        self.settings = settings or Settings()
        self.grid = grid
        self.font_small = pygame.font.Font(FONT_NAME, 14)
        self.font = pygame.font.Font(FONT_NAME, 18)
        self.font_big = pygame.font.Font(FONT_NAME, 22)

        cs = self._auto_cell_size(grid)
        win_w = GRID_MARGIN*2 + grid.width * cs + PANEL_W
        win_h = max(GRID_MARGIN*2 + grid.height * cs, 520)
        self.screen = pygame.display.set_mode((win_w, win_h), pygame.RESIZABLE)
        pygame.display.set_caption("Grassfire")

        self._buttons: list[UIButton] = []
        self._layout(win_w, win_h)

        self.opened: set[Cell] = set()
        self.path: List[Cell] = []

        self.running = False
        self.clock = pygame.time.Clock()
        self.steps_per_sec = 4
        self.state = "Idle"
        self.selected_map_key = "random"
        self._seed = self.settings.seed

        self.algo = GrassfireAlgo()
        self.algo.init(self.grid)
        self._last_metrics: Dict[str, object] = {}

    # ---------- layout ----------
    def _layout(self, win_w: int, win_h: int):
        """Integer cell_size that fits the window; grid on the left, panel on the right."""
        avail_w = max(1, win_w - PANEL_W - 2 * GRID_MARGIN)
        avail_h = max(1, win_h - 2 * GRID_MARGIN)
        self.cell_size = int(max(8, min(avail_w // self.grid.width, avail_h // self.grid.height)))

        self._grid_origin = (GRID_MARGIN, GRID_MARGIN)
        grid_right = GRID_MARGIN * 2 + self.grid.width * self.cell_size
        self._right_band = pygame.Rect(grid_right, 0, max(PANEL_W, win_w - grid_right), win_h)
        self._build_buttons()

    def _auto_cell_size(self, grid: Grid) -> int:
        target_h = 720 - GRID_MARGIN*2
        return max(14, min(CELL_SIZE_DEFAULT, target_h // grid.height))

    def run(self):
        while True:
            self._handle_events()
            if self.running:
                self._tick_algorithm()
            self._draw()
            self.clock.tick(60)

    def _tick_algorithm(self):
        t0 = time.time()
        step_interval = 1.0 / max(1, self.steps_per_sec)
        if not hasattr(self, "_last_step_t"):
            self._last_step_t = 0.0
        if t0 - self._last_step_t >= step_interval:
            self._last_step_t = t0
            self._do_step()

    def _do_step(self):
        res = self.algo.step()
        self.opened = set(res.opened)
        if res.path is not None:
            self.path = res.path
        if res.status == "done":
            self.state = "Path found"; self.running = False
        elif res.status == "no_path":
            self.state = "No path"; self.running = False
        elif res.status in ("running", "idle"):
            self.state = "Running" if self.running else "Idle"
        if res.metrics:
            self._last_metrics = res.metrics
        self._refresh_active_states()

    def _handle_events(self):
        for e in pygame.event.get():
            if e.type == pygame.QUIT:
                pygame.quit(); sys.exit(0)
            elif e.type == pygame.KEYDOWN:
                if e.key in (pygame.K_ESCAPE, pygame.K_q):
                    pygame.quit(); sys.exit(0)
                elif e.key == pygame.K_SPACE:
                    self._toggle_run()
                elif e.key == pygame.K_r:
                    self._reset()
                elif e.key == pygame.K_n:
                    self._do_step()
                elif e.key == pygame.K_g:
                    self._new_random()
                elif e.key in (pygame.K_PLUS, pygame.K_EQUALS):
                    self._bump_speed(+1)
                elif e.key in (pygame.K_MINUS, pygame.K_UNDERSCORE):
                    self._bump_speed(-1)
                elif e.key == pygame.K_1:
                    self._switch_map("01_corridor")
                elif e.key == pygame.K_2:
                    self._switch_map("02_open_field")
                elif e.key == pygame.K_3:
                    self._switch_map("03_walled_off")
            elif e.type == pygame.VIDEORESIZE:
                self.screen = pygame.display.set_mode((e.w, e.h), pygame.RESIZABLE)
                self._layout(e.w, e.h)
            elif e.type in (pygame.MOUSEMOTION, pygame.MOUSEBUTTONDOWN):
                for b in self._buttons:
                    b.handle_mouse(e)

    def _use_grid(self, grid: Grid, key: str):
        self.grid = grid
        self.selected_map_key = key
        self.algo = GrassfireAlgo()
        self.algo.init(self.grid)
        self._reset_overlays()
        self._layout(*self.screen.get_size())
        self.running = False; self.state = "Idle"
        self._refresh_active_states()

    def _switch_map(self, key: str):
        if key not in MAP_FILES: return
        try:
            grid = load_map(MAP_FILES[key])
        except Exception as ex:
            print(f"Failed to load map {key}: {ex}")
            return
        pygame.display.set_caption(f"Grassfire — {key}")
        self._use_grid(grid, key)

    def _new_random(self):
        self._seed = None if self._seed is None else self._seed + 1
        s = self.settings
        grid = random_grid(s.rows, s.cols, s.obstacle_chance, seed=self._seed)
        pygame.display.set_caption("Grassfire — random")
        self._use_grid(grid, "random")

    def _reset_overlays(self):
        self.opened.clear()
        self.path = []
        self._last_metrics = {}

    def _reset(self):
        self.running = False
        self.state = "Idle"
        self.algo.reset()
        self._reset_overlays()
        self._refresh_active_states()

    # ---------- drawing ----------
    def _draw(self):
        self.screen.fill((24, 26, 32))
        self._draw_grid()
        self._draw_metrics_and_buttons()
        pygame.display.flip()

    def _draw_grid(self):
        cs = self.cell_size
        ox, oy = self._grid_origin
        show_numbers = cs >= 16

        for (col, row), state in self.grid.scan():
            rect = pygame.Rect(ox + col*cs, oy + row*cs, cs, cs)
            if isinstance(state, Obstacle):
                pygame.draw.rect(self.screen, OBSTACLE_C, rect)
            elif isinstance(state, Layer) and state.depth > 0:
                pygame.draw.rect(self.screen, WAVE_CYAN, rect)
                if show_numbers:
                    txt = self.font_small.render(str(state.depth), True, BLACK)
                    self.screen.blit(txt, txt.get_rect(center=rect.center))
            else:
                pygame.draw.rect(self.screen, FREE_GRAY, rect)
            pygame.draw.rect(self.screen, BLACK, rect, 1)

        # cells stamped by the latest step
        for (col, row) in front_cells(self.grid, self.opened):
            s = pygame.Surface((cs, cs), pygame.SRCALPHA); s.fill(FRONT_GOLD_A)
            self.screen.blit(s, (ox + col*cs, oy + row*cs))

        if len(self.path) >= 2:
            pts = [(ox + col*cs + cs//2, oy + row*cs + cs//2) for (col, row) in self.path]
            pygame.draw.lines(self.screen, NEON_MINT, False, pts, 4)

        self._draw_badge(self.grid.start, BLUE, "S")
        goal = next((c for c, s in self.grid.scan() if isinstance(s, Destination)), self.grid.goal)
        self._draw_badge(goal, RED, "D")

    def _draw_badge(self, cell: Cell, color: Tuple[int,int,int], label: str):
        cs = self.cell_size
        ox, oy = self._grid_origin
        col, row = cell
        cx = ox + col*cs + cs//2
        cy = oy + row*cs + cs//2
        pygame.draw.circle(self.screen, color, (cx, cy), max(5, cs//2 - 2))
        txt = self.font_small.render(label, True, WHITE)
        self.screen.blit(txt, txt.get_rect(center=(cx, cy)))

    # ---------- buttons + metrics ----------
    def _build_buttons(self):
        self._buttons.clear()
        rb = self._right_band
        x = rb.x + 16
        y = rb.y + 190  # leaves space for metrics card above
        w = max(160, rb.width - 32)
        h = 34
        gap = 8

        def add(label, cb, *, togglable=False, store_as: str | None = None):
            btn = UIButton(label, pygame.Rect(x, y, w, h), cb, togglable=togglable)
            self._buttons.append(btn)
            if store_as:
                setattr(self, store_as, btn)

        add("Run / Pause", self._toggle_run, togglable=True, store_as="btn_run"); y += h + gap
        add("Step Once", self._do_step); y += h + gap
        add("Reset", self._reset);       y += h + gap
        add("New Random Grid", self._new_random); y += h + gap

        half = (w - 8) // 2
        self._buttons.append(UIButton("Speed −", pygame.Rect(x, y, half, h), lambda: self._bump_speed(-1)))
        self._buttons.append(UIButton("Speed +", pygame.Rect(x + half + 8, y, half, h), lambda: self._bump_speed(+1)))
        y += h + gap

        add("Map 1: Corridor",   lambda: self._switch_map("01_corridor"),   togglable=True, store_as="btn_map1"); y += h + gap
        add("Map 2: Open field", lambda: self._switch_map("02_open_field"), togglable=True, store_as="btn_map2"); y += h + gap
        add("Map 3: Walled off", lambda: self._switch_map("03_walled_off"), togglable=True, store_as="btn_map3")

        self._refresh_active_states()

    def _refresh_active_states(self):
        if hasattr(self, "btn_run"):
            self.btn_run.set_active(getattr(self, "running", False))
        key = getattr(self, "selected_map_key", None)
        for attr, k in (("btn_map1", "01_corridor"), ("btn_map2", "02_open_field"), ("btn_map3", "03_walled_off")):
            if hasattr(self, attr):
                getattr(self, attr).set_active(key == k)

    def _toggle_run(self):
        if self.state in ("Path found", "No path"):
            return
        self.running = not self.running
        self.state = "Running" if self.running else "Paused"
        self._refresh_active_states()

    def _bump_speed(self, dv: int):
        self.steps_per_sec = int(max(1, min(60, self.steps_per_sec + dv)))

    def _draw_metrics_and_buttons(self):
        rb = self._right_band

        card = pygame.Surface((rb.width - 20, 170), pygame.SRCALPHA)
        pygame.draw.rect(card, CARD_BG, card.get_rect(), border_radius=14)
        hi = pygame.Surface((card.get_width(), 24), pygame.SRCALPHA)
        pygame.draw.rect(hi, CARD_HI, hi.get_rect(), border_radius=14)
        card.blit(hi, (0,0))
        self.screen.blit(card, (rb.x + 10, rb.y + 10))

        x0 = rb.x + 24
        y0 = rb.y + 18

        def line(text, big=False, color=TEXT_LIGHT):
            nonlocal y0
            f = self.font_big if big else self.font
            surf = f.render(text, True, color)
            self.screen.blit(surf, (x0, y0))
            y0 += surf.get_height() + 6

        m = self._last_metrics
        line(self.state, big=True, color=ACCENT_GOLD)
        line(f"Depth: {m.get('depth', 0)}")
        line(f"Stamped: {m.get('stamped', 0)}")
        line(f"Path Len: {m.get('path_len', 0)}")
        line(f"Grid: {self.grid.width}x{self.grid.height} ({self.selected_map_key})")
        line(f"Speed: {self.steps_per_sec} layers/s")

        for b in self._buttons:
            b.draw(self.screen, self.font)


# ---------- main ----------
def main():
    s = Settings()
    Viewer(random_grid(s.rows, s.cols, s.obstacle_chance, seed=s.seed), s).run()

if __name__ == "__main__":
    main()
