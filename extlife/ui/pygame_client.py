"""Pygame 2D viewer for a running game.

Draws every tile, colours living cells by variant, outlines predators and
shows the active event.  The game advances at a configurable tick rate
while the display refreshes at the Pygame frame rate.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, ClassVar

import numpy as np
import pygame

if TYPE_CHECKING:
    from extlife.simulation.engine import EvolutionEngine
    from extlife.simulation.game import Game

from extlife.life.cell import CellVariant

# Colour palette
_BG = (20, 20, 24)
_DEAD = (35, 35, 42)
_GRID_LINE = (45, 45, 52)
_PREDATOR_OUTLINE = (230, 40, 40)
_TEXT = (200, 200, 200)

_VARIANT_COLOURS: dict[CellVariant, tuple[int, int, int]] = {
    CellVariant.STANDARD: (120, 200, 120),
    CellVariant.TERRITORIAL: (230, 180, 60),
    CellVariant.GREGARIOUS: (110, 160, 255),
    CellVariant.RESILIENT: (200, 130, 230),
}

# Brightness scales with energy up to this value
_ENERGY_SATURATION = 10.0


class PygameRenderer:
    """Renders a game into a Pygame window and drives the engine.

    Attributes:
        engine: The engine used to advance the game.
        game: The game being shown.
        cell_size: Pixel size of each tile.
        screen: The Pygame display surface.
    """

    _SPEED_STEPS: ClassVar[list[float]] = [0.5, 1.0, 2.0, 5.0, 10.0, 20.0, 60.0]

    def __init__(
        self,
        engine: EvolutionEngine,
        game: Game,
        cell_size: int = 16,
        ticks_per_second: float = 5.0,
        max_steps: int | None = None,
    ) -> None:
        """Initialise the renderer.

        Args:
            engine: The evolution engine.
            game: The game to render and advance.
            cell_size: Pixel width/height per tile.
            ticks_per_second: Generations per real-time second.
            max_steps: Stop advancing once the game reaches this step.
        """
        self.engine = engine
        self.game = game
        self.cell_size = cell_size
        self.ticks_per_second = ticks_per_second
        self.max_steps = max_steps
        self._speed_index = self._nearest_speed(ticks_per_second)
        self._tick_accumulator = 0.0

        board = game.board
        self._panel_width = 220
        self._win_w = board.width * cell_size + self._panel_width
        self._win_h = max(board.height * cell_size, 300)

        pygame.init()
        self.screen = pygame.display.set_mode((self._win_w, self._win_h))
        pygame.display.set_caption(f"extlife - {game.name}")
        self.clock = pygame.time.Clock()
        self.font = pygame.font.SysFont("monospace", 14)
        self.running = True
        self.paused = False

    def _nearest_speed(self, tps: float) -> int:
        """Return the index of the closest speed preset."""
        diffs = [abs(s - tps) for s in self._SPEED_STEPS]
        return diffs.index(min(diffs))

    @property
    def finished(self) -> bool:
        return self.max_steps is not None and self.game.latest.step >= self.max_steps

    def run(self, fps: int = 30) -> None:
        """Main loop: handle input, advance the game, render."""
        while self.running:
            dt = self.clock.tick(fps) / 1000.0
            self._handle_events()
            self._advance(dt)
            self._draw()

        pygame.quit()

    def _advance(self, dt: float) -> int:
        """Advance the game by as many generations as ``dt`` seconds allow.

        Returns:
            The number of generations computed.
        """
        if self.paused or self.finished:
            return 0
        self._tick_accumulator += self.ticks_per_second * dt
        steps = int(self._tick_accumulator)
        self._tick_accumulator -= steps
        done = 0
        for _ in range(steps):
            if self.finished:
                break
            self.engine.step(self.game, self.game.event_schedule)
            done += 1
        return done

    def _handle_events(self) -> None:
        """Process Pygame input events."""
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self.running = False
            elif event.type == pygame.KEYDOWN:
                if event.key == pygame.K_ESCAPE:
                    self.running = False
                elif event.key == pygame.K_SPACE:
                    self.paused = not self.paused
                elif event.key in (pygame.K_PLUS, pygame.K_EQUALS):
                    self._speed_index = min(len(self._SPEED_STEPS) - 1, self._speed_index + 1)
                    self.ticks_per_second = self._SPEED_STEPS[self._speed_index]
                elif event.key == pygame.K_MINUS:
                    self._speed_index = max(0, self._speed_index - 1)
                    self.ticks_per_second = self._SPEED_STEPS[self._speed_index]

    def _draw(self) -> None:
        """Render one frame."""
        self.screen.fill(_BG)
        self._draw_cells()
        self._draw_info_panel()
        pygame.display.flip()

    def _draw_cells(self) -> None:
        """Draw every tile; living cells are tinted by variant and energy."""
        cs = self.cell_size
        generation = self.game.latest
        for tile in self.game.board.tiles:
            cell = tile.cell
            rect = (tile.coord.x * cs, tile.coord.y * cs, cs - 1, cs - 1)
            if cell is None or not generation.is_alive(tile.coord):
                pygame.draw.rect(self.screen, _DEAD, rect)
                continue
            energy = generation.energy_of(tile.coord)
            t = 0.5 + 0.5 * min(max(energy, 0) / _ENERGY_SATURATION, 1.0)
            colour = np.asarray(_VARIANT_COLOURS[cell.variant], dtype=np.float64) * t
            pygame.draw.rect(self.screen, colour.astype(int).tolist(), rect)
            if cell.is_predatory:
                pygame.draw.rect(self.screen, _PREDATOR_OUTLINE, rect, width=2)

    def _panel_lines(self) -> list[str]:
        """Return the text lines shown in the info panel."""
        board = self.game.board
        generation = self.game.latest
        event = self.game.event_schedule.get(generation.step)
        lines = [
            f"Step: {generation.step}",
            f"Speed: {self.ticks_per_second:.1f} t/s",
            f"{'PAUSED' if self.paused else 'RUNNING'}",
            f"Next event: {event.value if event else '-'}",
            "",
            f"Alive: {board.count_alive(generation)}",
        ]
        counts = board.count_by_variant(generation)
        for variant in CellVariant:
            lines.append(f"  {variant.value}: {counts.get(variant, 0)}")
        predators = sum(1 for c in board.alive_cells(generation) if c.is_predatory)
        lines += [
            f"  predatory: {predators}",
            "",
            "--- Controls ---",
            "SPACE: pause",
            "+/-: speed",
            "ESC: quit",
        ]
        return lines

    def _draw_info_panel(self) -> None:
        """Draw a stats panel on the right side of the window."""
        panel_x = self.game.board.width * self.cell_size + 10
        y = 10
        for line in self._panel_lines():
            surf = self.font.render(line, True, _TEXT)
            self.screen.blit(surf, (panel_x, y))
            y += 18
