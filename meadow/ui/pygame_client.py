"""Pygame dashboard for watching a Meadow run.

Draws one row per colony: a food bar scaled to the colony's starting
supply, then one energy bar per member coloured by kind.  The engine
steps at a configurable tick rate while the display refreshes at the
Pygame frame rate, and stepping stops once the run is finished.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, ClassVar

import numpy as np
import pygame

if TYPE_CHECKING:
    from meadow.colony.colony import Colony
    from meadow.simulation.engine import SimulationEngine

from meadow.colony.entity import MAX_ENERGY, EntityKind

# Colour palette
_BG = (30, 20, 10)
_TEXT = (200, 200, 200)
_BAR_BG = (60, 45, 30)
_DEAD = (90, 90, 90)

_KIND_COLOURS: dict[EntityKind, tuple[int, int, int]] = {
    EntityKind.WORKER: (100, 200, 100),
    EntityKind.FIGHTER: (255, 80, 80),
    EntityKind.LEADER: (255, 200, 50),
}

# Food colour range (red when empty -> green when full)
_FOOD_LO = np.array([200, 50, 30], dtype=np.float64)
_FOOD_HI = np.array([50, 200, 30], dtype=np.float64)

_ROW_HEIGHT = 60
_BAR_HEIGHT = 14
_FOOD_BAR_WIDTH = 200
_ENERGY_BAR_WIDTH = 12


class PygameRenderer:
    """Renders a SimulationEngine's colonies into a Pygame window.

    Attributes:
        engine: The simulation engine to visualise.
        screen: The Pygame display surface.
    """

    # Speed presets: ticks per second
    _SPEED_STEPS: ClassVar[list[float]] = [
        0.5,
        1.0,
        3.0,
        5.0,
        10.0,
        30.0,
        60.0,
    ]

    def __init__(
        self,
        engine: SimulationEngine,
        ticks_per_second: float = 5.0,
    ) -> None:
        """Initialise the renderer.

        Args:
            engine: The simulation engine to render.
            ticks_per_second: Simulation ticks per real-time second.
        """
        self.engine = engine
        self.ticks_per_second = ticks_per_second
        self._speed_index = self._nearest_speed(ticks_per_second)
        self._tick_accumulator = 0.0
        self._start_food = {c.name: max(1, c.food_supply) for c in engine.colonies}

        widest = max((len(c.members) for c in engine.colonies), default=0)
        self._win_w = max(480, 240 + _FOOD_BAR_WIDTH + widest * (_ENERGY_BAR_WIDTH + 4))
        self._win_h = 90 + _ROW_HEIGHT * max(1, len(engine.colonies)) + 60

        pygame.init()
        self.screen = pygame.display.set_mode((self._win_w, self._win_h))
        pygame.display.set_caption("Meadow")
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
        """Main loop: handle events, step sim, render.

        Args:
            fps: Target frames per second.
        """
        while self.running:
            dt = self.clock.tick(fps) / 1000.0  # seconds elapsed
            self._handle_events()
            if not self.paused:
                self._tick_accumulator += self.ticks_per_second * dt
                steps = int(self._tick_accumulator)
                self._tick_accumulator -= steps
                for _ in range(steps):
                    if self.engine.finished:
                        break
                    self.engine.step()
            self._draw()

        pygame.quit()

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
                    self._speed_index = min(
                        len(self._SPEED_STEPS) - 1,
                        self._speed_index + 1,
                    )
                    self.ticks_per_second = self._SPEED_STEPS[self._speed_index]
                elif event.key == pygame.K_MINUS:
                    self._speed_index = max(0, self._speed_index - 1)
                    self.ticks_per_second = self._SPEED_STEPS[self._speed_index]

    def _draw(self) -> None:
        """Render one frame."""
        self.screen.fill(_BG)
        self._draw_header()
        for row, colony in enumerate(self.engine.colonies):
            self._draw_colony(colony, 90 + row * _ROW_HEIGHT)
        self._draw_controls()
        pygame.display.flip()

    def _draw_header(self) -> None:
        if self.engine.finished:
            status = "FINISHED"
        elif self.paused:
            status = "PAUSED"
        else:
            status = "RUNNING"
        lines = [
            f"Tick: {self.engine.tick} / {self.engine.config.max_ticks}",
            f"Speed: {self.ticks_per_second:.1f} t/s",
            status,
        ]
        self._blit_lines(lines, 10, 10)

    def _draw_colony(self, colony: Colony, y: int) -> None:
        """Draw name, food bar, and member energy bars for one colony."""
        label = f"{colony.name} ({'alive' if colony.is_alive else 'dead'})"
        self._blit_lines([label, f"food: {colony.food_supply}"], 10, y)

        x = 220
        frac = min(colony.food_supply / self._start_food.get(colony.name, 1), 1.0)
        colour = _FOOD_LO + frac * (_FOOD_HI - _FOOD_LO)
        pygame.draw.rect(self.screen, _BAR_BG, (x, y, _FOOD_BAR_WIDTH, _BAR_HEIGHT))
        pygame.draw.rect(
            self.screen,
            colour.astype(int).tolist() if colony.is_alive else _DEAD,
            (x, y, int(_FOOD_BAR_WIDTH * frac), _BAR_HEIGHT),
        )

        x += _FOOD_BAR_WIDTH + 20
        max_h = _ROW_HEIGHT - 20
        leader = colony.leader
        for entity in colony.members:
            h = int(max_h * entity.energy / MAX_ENERGY)
            colour = _KIND_COLOURS[entity.kind] if colony.is_alive else _DEAD
            pygame.draw.rect(self.screen, _BAR_BG, (x, y, _ENERGY_BAR_WIDTH, max_h))
            pygame.draw.rect(
                self.screen,
                colour,
                (x, y + max_h - h, _ENERGY_BAR_WIDTH, h),
            )
            if entity is leader:
                pygame.draw.rect(
                    self.screen,
                    _TEXT,
                    (x, y, _ENERGY_BAR_WIDTH, max_h),
                    width=1,
                )
            x += _ENERGY_BAR_WIDTH + 4

    def _draw_controls(self) -> None:
        lines = ["SPACE: pause   +/-: speed   ESC: quit"]
        self._blit_lines(lines, 10, self._win_h - 30)

    def _blit_lines(self, lines: list[str], x: int, y: int) -> None:
        for line in lines:
            surf = self.font.render(line, True, _TEXT)
            self.screen.blit(surf, (x, y))
            y += 18
