import argparse
import sys

from evosim.config import CFG
from evosim.sim import Simulation
from evosim.charts import final_charts
from evosim.persistence import SnapshotError, export_history, load, save


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description='Neuroevolution agent simulation')
    parser.add_argument('--headless', action='store_true',
                        help='Run without the pygame monitor, as fast as possible')
    parser.add_argument('--generations', '-g', type=int, default=20,
                        help='Number of generations to run (default: 20)')
    parser.add_argument('--seed', type=int, default=None,
                        help='Random seed (default: CFG.SEED)')
    parser.add_argument('--speed', type=float, default=None,
                        help='Simulation speed factor for the windowed run')
    parser.add_argument('--load', type=str, default=None,
                        help='Restore a saved snapshot before running')
    parser.add_argument('--save', type=str, default=None,
                        help='Write a snapshot when the run ends')
    parser.add_argument('--export', type=str, default=None,
                        help='Write the generation history (.csv or .json) when the run ends')
    parser.add_argument('--charts', type=str, default="simulation_results",
                        help='Directory for end-of-run charts (empty to skip)')
    parser.add_argument('--verbose', '-v', action='store_true',
                        help='Log every birth and death')
    return parser.parse_args(argv)


def run_windowed(sim, cfg, target_generation):
    from visualization.pygame.monitor import PygameMonitor

    monitor = PygameMonitor(sim, cfg)
    sim.on_render(monitor.render)
    sim.start()
    try:
        while monitor.should_continue() and sim.generation < target_generation:
            sim.frame()
        if monitor.should_stop:
            print("Simulation stopped by user")
    finally:
        monitor.cleanup()


def run(argv=None):
    args = parse_args(argv)
    cfg = CFG(VERBOSE=args.verbose)
    if args.seed is not None:
        cfg.SEED = args.seed
    if args.speed is not None:
        cfg.SIM_SPEED = args.speed
    if not args.headless:
        # keep the window responsive when ticks fall behind
        cfg.MAX_TICKS_PER_FRAME = 32

    sim = Simulation(cfg)
    if args.load:
        try:
            load(sim, args.load)
        except SnapshotError as exc:
            print(f"[main] LOAD_FAILED {exc}")
            return 1

    target = sim.generation + args.generations
    if args.headless:
        sim.run(args.generations)
    else:
        run_windowed(sim, cfg, target)

    if args.save:
        save(sim, args.save)
    if args.export:
        export_history(sim, args.export)
    if args.charts:
        final_charts(sim, args.charts)
    return 0


if __name__ == "__main__":
    sys.exit(run())
