import pygame

from wilson_maze.core.grid import Grid, NO_CELL
from wilson_maze.viz.recorder import VideoRecorder

class Viewer:
    COLOR_BG = (10, 10, 10)
    COLOR_WALL = (200, 200, 200)
    COLOR_TREE = (60, 100, 160) # Blue tint
    COLOR_WALK = (160, 70, 60)  # Cells of the current loop-erased walk
    COLOR_VISITED = (100, 150, 200)
    COLOR_SOLUTION = (255, 215, 0) # Gold
    COLOR_ENTRANCE = (40, 200, 90)
    COLOR_EXIT = (220, 60, 60)

    def __init__(self, grid: Grid, generator=None, solver=None, width=1280, height=720,
                 record=False, steps_per_frame=10):
        self.grid = grid
        self.generator = generator
        self.solver = solver
        self.screen_width = width
        self.screen_height = height
        self.steps_per_frame = steps_per_frame

        # Camera
        self.cell_size = 20.0  # Pixels per cell
        self.offset_x = 0.0
        self.offset_y = 0.0
        self.zoom_speed = 1.1

        self.recorder = VideoRecorder(active=record)

        self.font = None
        self.running = True
        self.clock = None
        self.surface = None
        self.gen_finished = generator is None
        self.solve_finished = solver is None

    def fit_to_screen(self):
        """Auto-adjust zoom and pan to fit the entire grid on screen with padding."""
        padding = 40
        available_w = self.screen_width - (padding * 2)
        available_h = self.screen_height - (padding * 2)

        self.cell_size = max(1.0, min(available_w / self.grid.width, available_h / self.grid.height))

        # Center
        self.offset_x = (self.screen_width - self.grid.width * self.cell_size) / 2
        self.offset_y = (self.screen_height - self.grid.height * self.cell_size) / 2

    def init_window(self):
        pygame.init()
        pygame.display.set_caption(f"Wilson's Maze - {self.grid.height}x{self.grid.width}")
        self.surface = pygame.display.set_mode((self.screen_width, self.screen_height), pygame.RESIZABLE)
        self.clock = pygame.time.Clock()
        self.font = pygame.font.SysFont("Consolas", 16)

        self.fit_to_screen()

    def world_to_screen(self, col, row):
        sx = col * self.cell_size + self.offset_x
        sy = row * self.cell_size + self.offset_y
        return sx, sy

    def handle_input(self):
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self.running = False

            elif event.type == pygame.VIDEORESIZE:
                self.screen_width, self.screen_height = event.w, event.h

            elif event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE:
                self.running = False

            elif event.type == pygame.MOUSEWHEEL:
                # Zoom towards mouse
                mx, my = pygame.mouse.get_pos()
                wx = (mx - self.offset_x) / self.cell_size
                wy = (my - self.offset_y) / self.cell_size

                if event.y > 0:
                    self.cell_size *= self.zoom_speed
                else:
                    self.cell_size /= self.zoom_speed
                self.cell_size = max(1.0, min(100.0, self.cell_size))

                # Keep the mouse over the same cell
                self.offset_x = mx - wx * self.cell_size
                self.offset_y = my - wy * self.cell_size

            elif event.type == pygame.MOUSEMOTION:
                if pygame.mouse.get_pressed()[0] or pygame.mouse.get_pressed()[2]:
                    self.offset_x += event.rel[0]
                    self.offset_y += event.rel[1]

    def cell_color(self, idx):
        grid = self.grid
        if grid.has_flag(idx, Grid.PATH):
            return self.COLOR_SOLUTION
        if grid.has_flag(idx, Grid.ENTRANCE):
            return self.COLOR_ENTRANCE
        if grid.has_flag(idx, Grid.EXIT):
            return self.COLOR_EXIT
        if grid.has_flag(idx, Grid.VISITED):
            return self.COLOR_VISITED
        if grid.has_flag(idx, Grid.MEMBER):
            return self.COLOR_TREE
        if grid.walk_to[idx] != NO_CELL:
            return self.COLOR_WALK
        return None

    def draw_grid(self, surface=None):
        surface = surface if surface is not None else self.surface
        surface.fill(self.COLOR_BG)
        screen_w, screen_h = surface.get_size()

        # Culling: visible cell range
        start_col = max(0, int(-self.offset_x / self.cell_size))
        start_row = max(0, int(-self.offset_y / self.cell_size))
        end_col = min(self.grid.width, int((screen_w - self.offset_x) / self.cell_size) + 1)
        end_row = min(self.grid.height, int((screen_h - self.offset_y) / self.cell_size) + 1)

        size = int(self.cell_size) + 1

        # Pass 1 - Backgrounds
        for row in range(start_row, end_row):
            for col in range(start_col, end_col):
                color = self.cell_color(row * self.grid.width + col)
                if color:
                    px, py = self.world_to_screen(col, row)
                    pygame.draw.rect(surface, color, (int(px), int(py), size, size))

        # Pass 2 - Walls, skipped when zoomed too far out to see them
        if self.cell_size > 4.0:
            for row in range(start_row, end_row):
                for col in range(start_col, end_col):
                    idx = row * self.grid.width + col
                    px, py = self.world_to_screen(col, row)
                    px, py = int(px), int(py)

                    if self.grid.has_wall(idx, Grid.SOUTH):
                        pygame.draw.line(surface, self.COLOR_WALL, (px, py + size), (px + size, py + size), 1)
                    if self.grid.has_wall(idx, Grid.EAST):
                        pygame.draw.line(surface, self.COLOR_WALL, (px + size, py), (px + size, py + size), 1)
                    if row == 0 and self.grid.has_wall(idx, Grid.NORTH):
                        pygame.draw.line(surface, self.COLOR_WALL, (px, py), (px + size, py), 1)
                    if col == 0 and self.grid.has_wall(idx, Grid.WEST):
                        pygame.draw.line(surface, self.COLOR_WALL, (px, py), (px, py + size), 1)

    def draw_hud(self):
        fps = int(self.clock.get_fps())
        if not self.gen_finished:
            status = "Generating"
        elif not self.solve_finished:
            status = "Solving"
        else:
            status = "Done"
        info = [
            f"FPS: {fps}",
            f"Size: {self.grid.height}x{self.grid.width} ({len(self.grid):,})",
            f"Zoom: {self.cell_size:.2f}",
            f"Status: {status}",
            "REC" if self.recorder.active else "",
        ]
        if self.solver and self.solver.path:
            info.append(f"Path: {len(self.solver.path)}")

        for i, text in enumerate(info):
            lbl = self.font.render(text, True, (255, 255, 255))
            self.surface.blit(lbl, (10, 10 + i * 20))

    def step(self, gen_iter, solver_iter):
        """Advances the generator, then the solver once generation is complete."""
        if not self.gen_finished:
            try:
                for _ in range(self.steps_per_frame):
                    next(gen_iter)
            except StopIteration:
                self.gen_finished = True
        elif not self.solve_finished:
            try:
                for _ in range(self.steps_per_frame):
                    next(solver_iter)
            except StopIteration:
                self.solve_finished = True

    def run_loop(self):
        gen_iter = self.generator.run() if self.generator else None
        solver_iter = self.solver.run() if self.solver else None

        while self.running:
            self.handle_input()
            self.step(gen_iter, solver_iter)

            self.draw_grid()
            self.draw_hud()
            pygame.display.flip()

            if self.recorder.active:
                self.recorder.capture_frame(self.surface)

            self.clock.tick(60)

        self.recorder.stop()
        pygame.quit()
