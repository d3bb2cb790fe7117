import unittest
import sys
import os

# Add project root to path so we can import wilson_maze
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from wilson_maze.core.grid import Grid, Cell, NO_CELL
from wilson_maze.core.errors import MazeConfigError, MazeInvariantError

class TestGrid(unittest.TestCase):
    def test_initialization(self):
        h, w = 4, 7
        grid = Grid(h, w)
        self.assertEqual(len(grid.cells), h * w)
        # All cells start fully walled, with no flags
        for val in grid.cells:
            self.assertEqual(val, Grid.ALL_WALLS)
        self.assertEqual(grid.entrance, NO_CELL)
        self.assertEqual(grid.exit, NO_CELL)

    def test_invalid_dimensions(self):
        for h, w in [(0, 5), (5, 0), (-1, 3), (0, 0)]:
            with self.assertRaises(MazeConfigError):
                Grid(h, w)
        # Still a ValueError for callers that only know the builtin
        with self.assertRaises(ValueError):
            Grid(0, 1)

    def test_coordinates(self):
        grid = Grid(3, 5)
        self.assertEqual(grid.index(2, 1), 11) # 2 * 5 + 1
        self.assertEqual(grid.coords(11), (2, 1))

        with self.assertRaises(IndexError):
            grid.index(-1, 0)
        with self.assertRaises(IndexError):
            grid.index(3, 0)
        with self.assertRaises(IndexError):
            grid.index(0, 5)

    def test_neighborhood_sizes(self):
        grid = Grid(3, 3)
        self.assertEqual(len(grid.neighborhood(grid.index(1, 1))), 4)
        self.assertEqual(len(grid.neighborhood(grid.index(0, 1))), 3)
        self.assertEqual(len(grid.neighborhood(grid.index(0, 0))), 2)
        self.assertEqual(len(grid.neighborhood(grid.index(2, 2))), 2)

    def test_neighborhood_order(self):
        grid = Grid(3, 3)
        center = grid.index(1, 1)
        # North, east, south, west
        self.assertEqual(grid.neighborhood(center), (1, 5, 7, 3))

        corner = grid.index(0, 0)
        self.assertEqual(grid.neighborhood(corner), (grid.index(0, 1), grid.index(1, 0)))

    def test_boundary_neighbors_absent(self):
        grid = Grid(2, 2)
        self.assertEqual(grid.neighbor(0, Grid.NORTH), NO_CELL)
        self.assertEqual(grid.neighbor(0, Grid.WEST), NO_CELL)
        self.assertEqual(grid.neighbor(0, Grid.EAST), 1)
        self.assertEqual(grid.neighbor(0, Grid.SOUTH), 2)
        self.assertEqual(grid.neighbor(3, Grid.SOUTH), NO_CELL)
        self.assertEqual(grid.neighbor(3, Grid.EAST), NO_CELL)

    def test_single_cell(self):
        grid = Grid(1, 1)
        self.assertEqual(grid.neighborhood(0), ())
        self.assertEqual(grid.all_cells(), [0])
        self.assertEqual(grid.open_passage_count(), 0)

    def test_all_cells_row_major(self):
        grid = Grid(2, 3)
        self.assertEqual(grid.all_cells(), [0, 1, 2, 3, 4, 5])

    def test_carve_is_symmetric(self):
        grid = Grid(2, 2)
        # 0,0  0,1
        # 1,0  1,1
        grid.carve(grid.index(0, 0), Grid.EAST)

        a, b = grid.index(0, 0), grid.index(0, 1)
        self.assertFalse(grid.has_wall(a, Grid.EAST))
        self.assertFalse(grid.has_wall(b, Grid.WEST))
        self.assertTrue(grid.is_open(a, Grid.EAST))
        self.assertTrue(grid.is_open(b, Grid.WEST))

        # Others remain
        self.assertTrue(grid.has_wall(a, Grid.NORTH))
        self.assertTrue(grid.has_wall(b, Grid.EAST))
        self.assertEqual(grid.open_passage_count(), 1)

    def test_carve_into_void(self):
        grid = Grid(2, 2)
        with self.assertRaises(MazeInvariantError):
            grid.carve(grid.index(0, 0), Grid.NORTH)
        # Nothing changed
        self.assertEqual(grid.cells[0], Grid.ALL_WALLS)

    def test_open_boundary(self):
        grid = Grid(2, 2)
        grid.open_boundary(grid.index(0, 1), Grid.NORTH)
        self.assertFalse(grid.has_wall(grid.index(0, 1), Grid.NORTH))
        # An outward opening is not a passage
        self.assertFalse(grid.is_open(grid.index(0, 1), Grid.NORTH))
        self.assertEqual(grid.open_passage_count(), 0)

        with self.assertRaises(MazeInvariantError):
            grid.open_boundary(grid.index(0, 0), Grid.EAST)

    def test_direction_to(self):
        grid = Grid(3, 3)
        center = grid.index(1, 1)
        self.assertEqual(grid.direction_to(center, grid.index(0, 1)), Grid.NORTH)
        self.assertEqual(grid.direction_to(center, grid.index(1, 2)), Grid.EAST)
        self.assertEqual(grid.direction_to(center, grid.index(2, 1)), Grid.SOUTH)
        self.assertEqual(grid.direction_to(center, grid.index(1, 0)), Grid.WEST)
        with self.assertRaises(MazeInvariantError):
            grid.direction_to(grid.index(0, 0), grid.index(2, 2))

    def test_reset_walk_pointers(self):
        grid = Grid(2, 2)
        grid.walk_to[0] = 1
        grid.walk_to[3] = 2
        grid.came_from[1] = 0
        grid.reset_walk_pointers()
        self.assertEqual(list(grid.walk_to), [NO_CELL] * 4)
        # The solver's predecessors are a separate field
        self.assertEqual(grid.came_from[1], 0)

    def test_reset_solver_state(self):
        grid = Grid(2, 2)
        grid.carve(0, Grid.EAST)
        grid.set_flag(0, Grid.MEMBER | Grid.VISITED | Grid.PATH)
        grid.came_from[1] = 0
        grid.walk_to[2] = 3
        grid.reset_solver_state()

        self.assertFalse(grid.has_flag(0, Grid.VISITED))
        self.assertFalse(grid.has_flag(0, Grid.PATH))
        self.assertTrue(grid.has_flag(0, Grid.MEMBER))
        self.assertFalse(grid.has_wall(0, Grid.EAST))
        self.assertEqual(grid.came_from[1], NO_CELL)
        self.assertEqual(grid.walk_to[2], 3)

    def test_resets_are_repeatable(self):
        grid = Grid(3, 3)
        for _ in range(3):
            grid.walk_to[4] = 5
            grid.came_from[8] = 7
            grid.reset_walk_pointers()
            grid.reset_solver_state()
            self.assertEqual(list(grid.walk_to), [NO_CELL] * 9)
            self.assertEqual(list(grid.came_from), [NO_CELL] * 9)
        # Bulk copies keep the arrays distinct from each other
        grid.walk_to[0] = 1
        self.assertEqual(grid.came_from[0], NO_CELL)
        self.assertEqual(len(grid.walk_to), 9)

    def test_flags(self):
        grid = Grid(2, 2)
        grid.set_flag(3, Grid.MEMBER | Grid.EXIT)
        self.assertTrue(grid.has_flag(3, Grid.MEMBER))
        grid.clear_flag(3, Grid.MEMBER)
        self.assertFalse(grid.has_flag(3, Grid.MEMBER))
        self.assertTrue(grid.has_flag(3, Grid.EXIT))
        # Walls are untouched by flag changes
        self.assertEqual(grid.cells[3] & Grid.ALL_WALLS, Grid.ALL_WALLS)

    def test_open_neighbors(self):
        grid = Grid(3, 3)
        center = grid.index(1, 1)
        grid.carve(center, Grid.WEST)
        grid.carve(center, Grid.NORTH)
        self.assertEqual(list(grid.open_neighbors(center)), [grid.index(0, 1), grid.index(1, 0)])

    def test_wall_signature(self):
        a, b = Grid(2, 3), Grid(2, 3)
        self.assertEqual(a.wall_signature(), b.wall_signature())
        # Flags other than walls do not count
        a.set_flag(0, Grid.MEMBER)
        self.assertEqual(a.wall_signature(), b.wall_signature())
        a.carve(0, Grid.SOUTH)
        self.assertNotEqual(a.wall_signature(), b.wall_signature())

class TestCellView(unittest.TestCase):
    def test_cell_attributes(self):
        grid = Grid(3, 4)
        grid.carve(grid.index(1, 2), Grid.EAST)
        cell = grid.cell(1, 2)

        self.assertIsInstance(cell, Cell)
        self.assertEqual((cell.row, cell.col), (1, 2))
        self.assertEqual(cell.walls, (True, False, True, True))
        self.assertFalse(cell.member)
        self.assertFalse(cell.entrance)
        self.assertFalse(cell.exit)
        self.assertFalse(cell.visited)
        self.assertFalse(cell.on_path)
        self.assertFalse(grid.cell(1, 3).west)

    def test_cell_neighbors(self):
        grid = Grid(3, 4)
        neighbors = grid.cell(0, 0).neighbors
        self.assertEqual(neighbors, [grid.cell(0, 1), grid.cell(1, 0)])

    def test_cell_directional_neighbor(self):
        grid = Grid(3, 4)
        corner = grid.cell(0, 0)
        self.assertIsNone(corner.neighbor(Grid.NORTH))
        self.assertIsNone(corner.neighbor(Grid.WEST))
        self.assertEqual(corner.neighbor(Grid.EAST), grid.cell(0, 1))
        self.assertEqual(corner.neighbor(Grid.SOUTH), grid.cell(1, 0))
        self.assertEqual(grid.cell(2, 3).neighbor(Grid.NORTH).neighbor(Grid.WEST), grid.cell(1, 2))

    def test_rows(self):
        grid = Grid(2, 3)
        rows = list(grid.rows())
        self.assertEqual(len(rows), 2)
        self.assertEqual([c.col for c in rows[1]], [0, 1, 2])
        self.assertEqual(len(list(grid.cells_view())), 6)

if __name__ == '__main__':
    unittest.main()
