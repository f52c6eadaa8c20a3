"""Pygame 2D visualization for the SandSim sandbox.

Renders the grid in a window, paints with the mouse and steps the
simulation at a configurable tick rate while the display refreshes at the
Pygame frame rate.  Brush edits are applied between ticks, never during
one.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, ClassVar

import pygame

if TYPE_CHECKING:
    from sandsim.simulation.engine import SimulationEngine

from sandsim.ui.palette import BACKGROUND, SWATCH, cell_colour
from sandsim.world.material import MaterialKind

_SWATCH_RECT = (10, 10, 40, 40)
_TEXT = (200, 200, 200)
_MAX_BRUSH = 8


class PygameRenderer:
    """Renders a SimulationEngine state into a Pygame window.

    Attributes:
        engine: The simulation engine to visualise.
        cell_size: Pixel size of each grid cell.
        brush_radius: Radius in cells of the paint brush.
        screen: The Pygame display surface.
    """

    # Speed presets: ticks per second
    _SPEED_STEPS: ClassVar[list[float]] = [
        1.0,
        3.0,
        5.0,
        10.0,
        15.0,
        30.0,
        60.0,
        120.0,
    ]

    def __init__(
        self,
        engine: SimulationEngine,
        cell_size: int = 10,
        ticks_per_second: float = 30.0,
        brush_radius: int = 0,
    ) -> None:
        """Initialise the renderer.

        Args:
            engine: The simulation engine to render.
            cell_size: Pixel width/height per grid cell.
            ticks_per_second: Simulation ticks per real-time second.
            brush_radius: Initial brush radius in cells.
        """
        self.engine = engine
        self.cell_size = cell_size
        self.ticks_per_second = ticks_per_second
        self.brush_radius = brush_radius
        self._speed_index = self._nearest_speed(ticks_per_second)
        self._tick_accumulator = 0.0

        self._win_w = engine.grid.width * cell_size
        self._win_h = engine.grid.height * cell_size

        pygame.init()
        self.screen = pygame.display.set_mode((self._win_w, self._win_h))
        pygame.display.set_caption("SandSim")
        self.clock = pygame.time.Clock()
        self.font = pygame.font.SysFont("monospace", 14)
        self.running = True
        self.paused = False

    def _nearest_speed(self, tps: float) -> int:
        """Return the index of the closest speed preset."""
        best = 0
        best_diff = abs(self._SPEED_STEPS[0] - tps)
        for i, s in enumerate(self._SPEED_STEPS):
            diff = abs(s - tps)
            if diff < best_diff:
                best, best_diff = i, diff
        return best

    def run(self, fps: int = 30) -> None:
        """Main loop: handle events, paint, step sim, render.

        Args:
            fps: Target frames per second.
        """
        while self.running:
            dt = self.clock.tick(fps) / 1000.0  # seconds elapsed
            self._handle_events()
            self._apply_brush()
            if not self.paused:
                self._tick_accumulator += self.ticks_per_second * dt
                steps = int(self._tick_accumulator)
                self._tick_accumulator -= steps
                for _ in range(steps):
                    self.engine.tick()
            self._draw()

        pygame.quit()

    def _handle_events(self) -> None:
        """Process Pygame input events."""
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self.running = False
            elif event.type == pygame.MOUSEWHEEL:
                self.engine.cycle_selection(event.y)
            elif event.type == pygame.KEYDOWN:
                if event.key == pygame.K_ESCAPE:
                    self.running = False
                elif event.key == pygame.K_SPACE:
                    self.paused = not self.paused
                elif event.key in (pygame.K_PLUS, pygame.K_EQUALS):
                    self._speed_index = min(
                        len(self._SPEED_STEPS) - 1,
                        self._speed_index + 1,
                    )
                    self.ticks_per_second = self._SPEED_STEPS[self._speed_index]
                elif event.key == pygame.K_MINUS:
                    self._speed_index = max(0, self._speed_index - 1)
                    self.ticks_per_second = self._SPEED_STEPS[self._speed_index]
                elif event.key == pygame.K_RIGHTBRACKET:
                    self.brush_radius = min(_MAX_BRUSH, self.brush_radius + 1)
                elif event.key == pygame.K_LEFTBRACKET:
                    self.brush_radius = max(0, self.brush_radius - 1)

    def _apply_brush(self) -> None:
        """Paint or erase under the mouse while a button is held."""
        left, _, right = pygame.mouse.get_pressed()
        if not (left or right):
            return
        mx, my = pygame.mouse.get_pos()
        x = mx // self.cell_size
        y = my // self.cell_size
        if left:
            self.engine.place(
                self.engine.selected_material,
                x,
                y,
                self.brush_radius,
            )
        if right:
            self.engine.erase(x, y, self.brush_radius)

    def _draw(self) -> None:
        """Render one frame."""
        self.screen.fill(BACKGROUND)
        self._draw_cells()
        self._draw_swatch()
        self._draw_status()
        pygame.display.flip()

    def _draw_cells(self) -> None:
        """Draw every non-empty cell as a filled square."""
        cs = self.cell_size
        grid = self.engine.grid
        for y in range(grid.height):
            for x in range(grid.width):
                view = self.engine.cell_view(x, y)
                if view.kind is MaterialKind.EMPTY:
                    continue
                above = grid.get(x, y - 1) if y > 0 else None
                pygame.draw.rect(
                    self.screen,
                    cell_colour(view, x, y, above),
                    (x * cs, y * cs, cs, cs),
                )

    def _draw_swatch(self) -> None:
        """Show the selected material in the top-left corner."""
        pygame.draw.rect(
            self.screen,
            SWATCH[self.engine.selected_material],
            _SWATCH_RECT,
        )

    def _draw_status(self) -> None:
        """Draw a one-line status next to the swatch."""
        line = (
            f"{self.engine.selected_material.name.lower()}  "
            f"brush {self.brush_radius}  "
            f"{self.ticks_per_second:.0f} t/s  "
            f"gen {self.engine.generation}"
            f"{'  PAUSED' if self.paused else ''}"
        )
        surf = self.font.render(line, True, _TEXT)
        self.screen.blit(surf, (60, 22))
