import argparse
import sys
import os
import logging

# Ensure project root is in path so we can import 'bridge_engine' package
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from bridge_engine.core.errors import OrthotopeError

DEFAULT_DIMS = [15, 10]
DEFAULT_DELAY = 0.3

def setup_logging(verbose: bool):
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%H:%M:%S'
    )

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Bridge Engine: random bridge building on N-dimensional grids")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable verbose logging (prints the grid every step)")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Simulate Command
    sim_parser = subparsers.add_parser("simulate", help="Build random bridges until one spans the grid")
    sim_parser.add_argument("--dims", type=int, nargs="+", default=DEFAULT_DIMS, help="Axis lengths, first axis is the span direction")
    sim_parser.add_argument("--seed", type=int, default=None, help="Random Seed")
    sim_parser.add_argument("--delay", type=float, default=DEFAULT_DELAY, help="Seconds to pause between steps")
    sim_parser.add_argument("--max-steps", type=int, default=None, help="Stop after this many steps")
    sim_parser.add_argument("--record-events", type=str, help="Save build events to binary file")
    sim_parser.add_argument("--visual", action="store_true", help="Show visualization (2-D only)")
    sim_parser.add_argument("--record", action="store_true", help="Record simulation video (2-D only)")

    # Replay Command
    replay_parser = subparsers.add_parser("replay", help="Replay an event log")
    replay_parser.add_argument("event_file", help="Path to event log file")
    replay_parser.add_argument("--visual", action="store_true", help="Show visualization (2-D only)")
    replay_parser.add_argument("--fps", type=int, default=30, help="Replay speed in steps per second")

    # Benchmark Command
    bench_parser = subparsers.add_parser("benchmark", help="Measure occupancy at the spanning point")
    bench_parser.add_argument("--dims", type=int, nargs="+", default=[20, 20], help="Axis lengths")
    bench_parser.add_argument("--trials", type=int, default=50, help="Number of simulations")
    bench_parser.add_argument("--seed", type=int, default=None, help="Random Seed")
    return parser

def simulate(args, logger) -> int:
    from bridge_engine.core.grid import Orthotope
    from bridge_engine.core.events import EventWriter
    from bridge_engine.algo.builder import RandomBridgeBuilder

    if (args.visual or args.record) and len(args.dims) != 2:
        logger.error(f"Visual mode supports 2-D grids only, got {len(args.dims)}-D")
        return 1

    evt_writer = None
    if args.record_events:
        evt_writer = EventWriter(args.record_events)
        logger.info(f"Recording events to {args.record_events}...")

    try:
        grid = Orthotope(args.dims, seed=args.seed, event_writer=evt_writer)
        logger.info(f"Simulating on {'x'.join(map(str, grid.lengths))} grid ({grid.cell_count} cells)...")

        if args.visual or args.record:
            from bridge_engine.viz.renderer import Renderer
            # The window paces the steps, so the builder itself never sleeps
            builder = RandomBridgeBuilder(grid, max_steps=args.max_steps)
            fps = int(round(1.0 / args.delay)) if args.delay > 0 else 60
            renderer = Renderer(grid, generator=builder, fps=max(1, fps), record=args.record)
            renderer.init_window()
            renderer.run_loop()
        else:
            builder = RandomBridgeBuilder(grid, delay=args.delay, max_steps=args.max_steps)
            builder.run_all()
            if grid.dimensions <= 2:
                print(grid)
    finally:
        if evt_writer:
            evt_writer.close()

    if builder.completed:
        logger.info("--- BRIDGE COMPLETED")
        return 0
    logger.warning(f"--- BRIDGE NOT COMPLETED after {builder.step_count} steps")
    return 1

def replay(args, logger) -> int:
    from bridge_engine.core.events import EventReader
    from bridge_engine.core.grid import Orthotope
    from bridge_engine.viz.replay import EventAdapter

    logger.info(f"Replaying {args.event_file}...")
    reader = EventReader(args.event_file)
    try:
        lengths = reader.read_header()
        logger.info(f"Log Header: {list(lengths)}")

        grid = Orthotope(lengths)
        adapter = EventAdapter(grid, reader)

        if args.visual:
            from bridge_engine.viz.renderer import Renderer
            renderer = Renderer(grid, generator=adapter, fps=args.fps)
            renderer.init_window()
            renderer.run_loop()
        else:
            adapter.run_all()
            if grid.dimensions <= 2:
                print(grid)
    finally:
        reader.close()

    logger.info(f"Replayed {adapter.step_count} bridges, spanning: {grid.is_spanning()}")
    return 0 if adapter.completed else 1

def benchmark(args, logger) -> int:
    import numpy as np
    from bridge_engine.algo.builder import run_trials

    logger.info(f"Running {args.trials} trials on {'x'.join(map(str, args.dims))}...")
    results = run_trials(args.dims, args.trials, seed=args.seed)

    occupancy = np.array([r["occupancy"] for r in results])
    seconds = np.array([r["seconds"] for r in results])
    completed = sum(1 for r in results if r["completed"])

    print(f"\n{'METRIC':<20} | {'VALUE':<12}")
    print("-" * 36)
    print(f"{'Completed':<20} | {completed}/{len(results)}")
    print(f"{'Mean occupancy':<20} | {occupancy.mean():<12.4f}")
    print(f"{'Std occupancy':<20} | {occupancy.std():<12.4f}")
    print(f"{'Mean time (s)':<20} | {seconds.mean():<12.4f}")
    return 0

def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    setup_logging(args.verbose)
    logger = logging.getLogger("bridge_engine")

    if args.command is None:
        parser.print_help()
        return 0

    logger.info(f"Running command: {args.command}")

    commands = {"simulate": simulate, "replay": replay, "benchmark": benchmark}
    try:
        return commands[args.command](args, logger)
    except OrthotopeError as e:
        logger.error(f"exit: {e}")
        return 1

if __name__ == "__main__":
    sys.exit(main())
