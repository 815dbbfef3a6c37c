import numpy as np
import pygame

from bridge_engine.core import keys
from bridge_engine.core.clusters import ClusterAnalyzer
from bridge_engine.core.grid import Orthotope

class Renderer:
    COLOR_BG = (10, 10, 10)
    COLOR_EMPTY = (40, 40, 40)
    COLOR_GRIDLINE = (25, 25, 25)
    COLOR_BRIDGE = (60, 100, 160)# Blue tint
    COLOR_SPANNING = (255, 215, 0)# Gold

    def __init__(self, grid: Orthotope, generator=None, width=1280, height=720, fps=60, record=False):
        if grid.dimensions != 2:
            raise ValueError(f"Visual mode needs a 2-D grid, got {grid.dimensions}-D")
        self.grid = grid
        self.generator = generator
        self.screen_width = width
        self.screen_height = height
        self.fps = fps

        # Camera
        self.cell_size = 20.0  # Pixels per cell
        self.offset_x = 0.0
        self.offset_y = 0.0

        from bridge_engine.viz.recorder import VideoRecorder
        self.recorder = VideoRecorder(active=record, fps=fps)

        self.font = None
        self.running = True
        self.clock = None
        self.surface = None
        self.gen_finished = False
        self.spanning_cells = set()

    def fit_to_screen(self):
        """Auto-adjust zoom and pan to fit the entire grid on screen with padding."""
        padding = 40
        width, height = self.grid.lengths
        available_w = self.screen_width - (padding * 2)
        available_h = self.screen_height - (padding * 2)

        self.cell_size = max(1.0, min(available_w / width, available_h / height))

        self.offset_x = (self.screen_width - width * self.cell_size) / 2
        self.offset_y = (self.screen_height - height * self.cell_size) / 2

    def init_window(self):
        pygame.init()
        width, height = self.grid.lengths
        pygame.display.set_caption(f"Bridge Building - {width}x{height}")
        self.surface = pygame.display.set_mode((self.screen_width, self.screen_height), pygame.RESIZABLE)
        self.clock = pygame.time.Clock()
        self.font = pygame.font.SysFont("Consolas", 16)
        self.fit_to_screen()

    def build_frame(self) -> np.ndarray:
        """
        One RGB pixel per cell, shaped (lengths[0], lengths[1], 3) so that the
        first axis runs horizontally, matching pygame.surfarray.
        """
        frame = np.empty(self.grid.lengths + (3,), dtype=np.uint8)
        frame[:, :] = self.COLOR_EMPTY
        for key in self.grid.occupied:
            frame[keys.decode(key)] = self.COLOR_BRIDGE
        for key in self.spanning_cells:
            frame[keys.decode(key)] = self.COLOR_SPANNING
        return frame

    def handle_input(self):
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self.running = False
            elif event.type == pygame.VIDEORESIZE:
                self.screen_width, self.screen_height = event.w, event.h
                self.fit_to_screen()

    def draw_grid(self):
        self.surface.fill(self.COLOR_BG)
        width, height = self.grid.lengths

        cells = pygame.surfarray.make_surface(self.build_frame())
        size = (int(width * self.cell_size), int(height * self.cell_size))
        self.surface.blit(pygame.transform.scale(cells, size), (int(self.offset_x), int(self.offset_y)))

        # Cell borders only once cells are large enough to see them
        if self.cell_size > 4.0:
            left, top = int(self.offset_x), int(self.offset_y)
            for x in range(width + 1):
                px = left + int(x * self.cell_size)
                pygame.draw.line(self.surface, self.COLOR_GRIDLINE, (px, top), (px, top + size[1]), 1)
            for y in range(height + 1):
                py = top + int(y * self.cell_size)
                pygame.draw.line(self.surface, self.COLOR_GRIDLINE, (left, py), (left + size[0], py), 1)

    def draw_hud(self):
        steps = self.generator.step_count if self.generator else 0
        if not self.gen_finished:
            status = "Building"
        elif self.generator and self.generator.completed:
            status = "Spanning"
        else:
            status = "Not spanning"
        info = [
            f"Size: {self.grid.lengths[0]}x{self.grid.lengths[1]} ({self.grid.cell_count:,})",
            f"Bridges: {self.grid.occupied_count:,} ({self.grid.occupancy:.1%})",
            f"Steps: {steps:,}",
            f"Status: {status}",
            "REC" if self.recorder.active else "",
        ]

        for i, text in enumerate(info):
            lbl = self.font.render(text, True, (255, 255, 255))
            self.surface.blit(lbl, (10, 10 + i * 20))

    def step(self, gen_iter):
        try:
            next(gen_iter)
        except StopIteration:
            self.gen_finished = True
            if self.generator.completed:
                self.spanning_cells = ClusterAnalyzer.spanning_cells(self.grid)

    def run_loop(self):
        gen_iter = self.generator.run() if self.generator else None
        if gen_iter is None:
            self.gen_finished = True

        while self.running:
            self.handle_input()

            if not self.gen_finished:
                self.step(gen_iter)

            self.draw_grid()
            self.draw_hud()
            pygame.display.flip()

            if self.recorder.active:
                self.recorder.capture_frame(pygame.surfarray.array3d(self.surface))

            self.clock.tick(self.fps)

        self.recorder.stop()
        pygame.quit()
