import argparse
import sys
import os
import logging
import time

# Ensure project root is in path so we can import 'wilson_maze' package
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from wilson_maze.core.errors import (
    MazeConfigError, validate_dimensions, validate_gate, validate_scale, validate_steps_per_frame,
)

def setup_logging(verbose: bool):
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%H:%M:%S'
    )

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Wilson's Maze: uniform spanning tree maze generator")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable verbose logging")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Generate Command
    gen_parser = subparsers.add_parser("generate", help="Generate a new maze")
    gen_parser.add_argument("--height", type=int, default=125, help="Height of maze (in cells)")
    gen_parser.add_argument("--width", type=int, default=125, help="Width of maze (in cells)")
    gen_parser.add_argument("--scale", type=int, default=20, help="Width of cells in rendered images")
    gen_parser.add_argument("--seed", type=int, default=None, help="Random seed for a reproducible maze")
    gen_parser.add_argument("--solve", action="store_true", help="Solve maze before rendering")
    gen_parser.add_argument("--text", type=str, help="Text file to render ('-' for stdout)")
    gen_parser.add_argument("--png", type=str, help="PNG image file to render")
    gen_parser.add_argument("--svg", type=str, help="SVG image file to render")
    gen_parser.add_argument("--stats", action="store_true", help="Log passage statistics")
    gen_parser.add_argument("--visual", action="store_true", help="Show generation in a window")
    gen_parser.add_argument("--record", action="store_true", help="Record the window to video")
    gen_parser.add_argument("--steps-per-frame", type=int, default=10, help="Walks per frame in visual mode")

    # Benchmark Command
    bench_parser = subparsers.add_parser("benchmark", help="Time generation and solving")
    bench_parser.add_argument("--sizes", type=int, nargs="+", default=[50, 100, 200], help="Square maze sizes")
    bench_parser.add_argument("--seed", type=int, default=123, help="Random seed")

    return parser

def run_generate(args, logger):
    from wilson_maze.core.grid import Grid
    from wilson_maze.algo.wilson import WilsonsAlgorithm
    from wilson_maze.algo.solvers import DepthFirstSolver

    if args.seed is not None:
        logger.info(f"Using seed {args.seed}")

    grid = Grid(args.height, args.width)
    generator = WilsonsAlgorithm(grid, seed=args.seed)
    solver = DepthFirstSolver(grid) if args.solve else None

    started = time.perf_counter()
    if args.visual or args.record:
        logger.info("Visual mode enabled - Opening window...")
        from wilson_maze.viz.viewer import Viewer
        viewer = Viewer(grid, generator=generator, solver=solver, record=args.record,
                        steps_per_frame=args.steps_per_frame)
        viewer.init_window()
        viewer.run_loop()
        if not (viewer.gen_finished and viewer.solve_finished):
            logger.warning("Window closed before the maze was finished; skipping output.")
            return
    else:
        generator.run_all()
        logger.info(f"Created {args.height} x {args.width} maze in {time.perf_counter() - started:.4f}s")
        if solver:
            started = time.perf_counter()
            solver.run_all()
            logger.info(f"Solved maze in {time.perf_counter() - started:.4f}s, path length {len(solver.path)}")

    if args.stats:
        from wilson_maze.core.stats import calculate_stats
        logger.info(f"Stats: {calculate_stats(grid)}")

    if args.text:
        from wilson_maze.render.text import write_text
        write_text(grid, args.text, show_path=args.solve)
        logger.info(f"Created {args.text}")

    if args.png:
        started = time.perf_counter()
        from wilson_maze.render.raster import write_png
        write_png(grid, args.png, scale=args.scale, show_path=args.solve)
        logger.info(f"Created {args.png} in {time.perf_counter() - started:.4f}s")

    if args.svg:
        started = time.perf_counter()
        from wilson_maze.render.vector import write_svg
        write_svg(grid, args.svg, scale=args.scale, show_path=args.solve)
        logger.info(f"Created {args.svg} in {time.perf_counter() - started:.4f}s")

def run_benchmark(args):
    from wilson_maze.core.grid import Grid
    from wilson_maze.algo.wilson import WilsonsAlgorithm
    from wilson_maze.algo.solvers import DepthFirstSolver

    print(f"\n{'SIZE':<12} | {'GEN (s)':<10} | {'SOLVE (s)':<10} | {'WALK STEPS':<10} | {'PATH LEN':<10} | {'VISITED':<10}")
    print("-" * 78)

    for size in args.sizes:
        grid = Grid(size, size)
        generator = WilsonsAlgorithm(grid, seed=args.seed)
        t0 = time.perf_counter()
        generator.run_all()
        gen_time = time.perf_counter() - t0

        solver = DepthFirstSolver(grid)
        t0 = time.perf_counter()
        solver.run_all()
        solve_time = time.perf_counter() - t0

        label = f"{size}x{size}"
        print(f"{label:<12} | {gen_time:<10.4f} | {solve_time:<10.4f} | {generator.step_count:<10} | "
              f"{len(solver.path):<10} | {solver.visited_count:<10}")

def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    setup_logging(args.verbose)
    logger = logging.getLogger("wilson_maze")

    if args.command is None:
        parser.print_help()
        return

    logger.info(f"Running command: {args.command}")

    # Configuration errors are reported before any work starts
    try:
        if args.command == "generate":
            validate_dimensions(args.height, args.width)
            validate_gate(args.width)
            validate_scale(args.scale)
            validate_steps_per_frame(args.steps_per_frame)
        elif args.command == "benchmark":
            for size in args.sizes:
                validate_dimensions(size, size)
                validate_gate(size)
    except MazeConfigError as e:
        parser.error(str(e))

    if args.command == "generate":
        run_generate(args, logger)
    elif args.command == "benchmark":
        logger.info(f"Running benchmark for sizes {args.sizes}...")
        run_benchmark(args)

if __name__ == "__main__":
    main()
