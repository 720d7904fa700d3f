"""Command-line driver for the universe."""

import argparse
import sys
import time
from typing import List, Optional, Tuple

from ..core.universe import Universe
from ..core.simulation import Simulation
from ..core.patterns import PatternLibrary

SEPARATOR = "-" * 66
DEFAULT_PATTERN = "Sprawl"


class CLILifeDriver:
    """Seeds a universe and prints it generation after generation."""

    def __init__(self, pattern_dir: Optional[str] = None):
        """Initialize the driver.

        Args:
            pattern_dir: Directory holding extra JSON patterns
        """
        self.pattern_library = PatternLibrary(pattern_dir)
        self.pattern_library.load_all_patterns()

    def build_universe(
        self,
        width: int,
        height: int,
        pattern: str = DEFAULT_PATTERN,
        pattern_x: int = 0,
        pattern_y: int = 0,
        verbose: bool = False,
    ) -> Universe:
        """Create a universe and seed it with a named pattern.

        Args:
            width: Universe width
            height: Universe height
            pattern: Name of the seed pattern
            pattern_x: X offset for pattern placement
            pattern_y: Y offset for pattern placement
            verbose: Print progress updates

        Returns:
            The seeded universe

        Raises:
            ValueError: If the pattern is unknown
            IndexError: If the pattern does not fit at the given offset
        """
        seed = self.pattern_library.get_pattern(pattern)
        if seed is None:
            available = ", ".join(self.pattern_library.list_patterns())
            raise ValueError(f"Pattern '{pattern}' not found. Available patterns: {available}")

        universe = Universe(width, height)
        if verbose:
            print(f"Initializing {width}x{height} universe")
            print(f"Loading pattern '{pattern}' at ({pattern_x}, {pattern_y})")
        seed.apply_to_universe(universe, pattern_x, pattern_y)

        return universe

    def run(
        self,
        universe: Universe,
        interval: float = 2.0,
        generations: Optional[int] = None,
        until_stable: bool = False,
    ) -> Tuple[int, str, dict]:
        """Print the universe every generation, pausing in between.

        Args:
            universe: Seeded universe to run
            interval: Seconds to sleep between generations
            generations: Stop after this many generations (None runs forever)
            until_stable: Stop once the universe dies out or repeats itself

        Returns:
            Tuple of (final_generation, finish_reason, statistics)
        """
        simulation = Simulation(universe)

        while True:
            print(f"tick {simulation.generation}\n")
            print(universe.render())
            print(SEPARATOR)

            if until_stable:
                if simulation.population == 0:
                    return simulation.generation, "extinction", simulation.get_statistics()
                if simulation.cycle_detected:
                    return simulation.generation, "cycle", simulation.get_statistics()

            if generations is not None and simulation.generation >= generations:
                return simulation.generation, "max_generations", simulation.get_statistics()

            time.sleep(interval)
            simulation.step()

    def list_patterns(self) -> None:
        """List available patterns by category."""
        categories = self.pattern_library.get_patterns_by_category()

        print("Available patterns:")
        for category, patterns in categories.items():
            print(f"\n{category}:")
            for pattern_name in patterns:
                pattern = self.pattern_library.get_pattern(pattern_name)
                if pattern:
                    if pattern.cells:
                        size = pattern.get_size()
                        print(f"  {pattern_name}: {size[0]}x{size[1]}, {len(pattern.cells)} cells")
                    else:
                        print(f"  {pattern_name}: whole universe")
                    if pattern.description:
                        print(f"    {pattern.description}")


def create_parser() -> argparse.ArgumentParser:
    """Create command-line argument parser.

    Returns:
        Configured ArgumentParser
    """
    parser = argparse.ArgumentParser(
        description="Run Conway's Game of Life with orthogonal neighbours from the command line",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Run the default seed on a 20x20 universe, a tick every 2 seconds
  lifegrid-cli

  # Fill a 10x10 universe and run ten quick generations
  lifegrid-cli -W 10 -H 10 --pattern Everything -i 0.2 -n 10

  # Run the diagonal pair until it repeats
  lifegrid-cli --pattern "Diagonal Pair" --pattern-x 5 --pattern-y 5 --until-stable

  # List available patterns
  lifegrid-cli --list-patterns
        """,
    )

    # Universe configuration
    parser.add_argument("-W", "--width", type=int, default=20, help="Universe width (default: 20)")

    parser.add_argument("-H", "--height", type=int, default=20, help="Universe height (default: 20)")

    # Pattern configuration
    parser.add_argument(
        "--pattern",
        type=str,
        default=DEFAULT_PATTERN,
        help=f"Seed pattern (default: {DEFAULT_PATTERN})",
    )

    parser.add_argument(
        "--pattern-x",
        type=int,
        default=0,
        help="X offset for pattern placement (default: 0)",
    )

    parser.add_argument(
        "--pattern-y",
        type=int,
        default=0,
        help="Y offset for pattern placement (default: 0)",
    )

    parser.add_argument(
        "--pattern-dir",
        type=str,
        help="Directory of extra JSON patterns (default: ./patterns)",
    )

    # Simulation configuration
    parser.add_argument(
        "-i",
        "--interval",
        type=float,
        default=2.0,
        help="Seconds between generations (default: 2.0)",
    )

    parser.add_argument(
        "-n",
        "--generations",
        type=int,
        help="Stop after this many generations (default: run until interrupted)",
    )

    parser.add_argument(
        "--until-stable",
        action="store_true",
        help="Stop when the universe dies out or enters a cycle",
    )

    # Output configuration
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Print detailed progress information",
    )

    parser.add_argument(
        "--list-patterns",
        action="store_true",
        help="List all available patterns and exit",
    )

    return parser


def format_finish_reason(reason: str, stats: dict) -> str:
    """Format the run's finish reason for display.

    Args:
        reason: Finish reason from CLILifeDriver.run
        stats: Statistics dictionary

    Returns:
        Formatted reason string
    """
    if reason == "extinction":
        return "Extinction - all cells died"
    elif reason == "cycle":
        cycle_len = stats.get("cycle_length", 0)
        cycle_start = stats.get("cycle_start_generation", 0)
        return f"Cycle detected - length {cycle_len}, started at generation {cycle_start}"
    elif reason == "max_generations":
        return f"Generation limit reached ({stats.get('generation', 0)})"
    else:
        return f"Unknown reason: {reason}"


def print_results(final_generation: int, reason: str, stats: dict, verbose: bool) -> None:
    """Print the outcome of a finished run.

    Args:
        final_generation: Final generation number
        reason: Finish reason
        stats: Statistics dictionary
        verbose: Whether to show detailed statistics
    """
    print(f"\nStopped after {final_generation} generations")
    print(f"Finish reason: {format_finish_reason(reason, stats)}")

    if verbose:
        print("\nDetailed Statistics:")
        print(f"  Universe size: {stats['grid_size'][0]}x{stats['grid_size'][1]}")
        print(f"  Final population: {stats['population']}")
        print(f"  Population density: {stats['population_density']:.2%}")
        print(f"  Population change rate: {stats['population_change_rate']:.2f}")

        if stats["bounding_box"]:
            bbox = stats["bounding_box"]
            bbox_size = stats["bounding_box_size"]
            print(
                f"  Bounding box: ({bbox[0]}, {bbox[1]}) to ({bbox[2]}, {bbox[3]}) " f"[{bbox_size[0]}x{bbox_size[1]}]"
            )
    else:
        print(f"Population: {stats['population']}")


def validate_args(args: argparse.Namespace) -> bool:
    """Validate command-line arguments.

    Args:
        args: Parsed arguments

    Returns:
        True if arguments are valid
    """
    errors = []

    if args.width <= 0:
        errors.append("Width must be positive")

    if args.height <= 0:
        errors.append("Height must be positive")

    if args.interval < 0:
        errors.append("Interval must be non-negative")

    if args.generations is not None and args.generations < 0:
        errors.append("Generations must be non-negative")

    if args.pattern_x < 0:
        errors.append("Pattern X offset must be non-negative")

    if args.pattern_y < 0:
        errors.append("Pattern Y offset must be non-negative")

    if errors:
        print("Error: Invalid arguments:")
        for error in errors:
            print(f"  - {error}")
        return False

    return True


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for CLI interface.

    Args:
        argv: Argument list (defaults to sys.argv[1:])

    Returns:
        Exit code (0 for success, 1 for error)
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    cli = CLILifeDriver(args.pattern_dir)

    if args.list_patterns:
        cli.list_patterns()
        return 0

    if not validate_args(args):
        return 1

    try:
        universe = cli.build_universe(
            width=args.width,
            height=args.height,
            pattern=args.pattern,
            pattern_x=args.pattern_x,
            pattern_y=args.pattern_y,
            verbose=args.verbose,
        )

        final_generation, reason, stats = cli.run(
            universe,
            interval=args.interval,
            generations=args.generations,
            until_stable=args.until_stable,
        )

        print_results(final_generation, reason, stats, args.verbose)
        return 0

    except KeyboardInterrupt:
        print("\nSimulation interrupted by user")
        return 1
    except Exception as e:
        print(f"Error: {e}")
        if args.verbose:
            import traceback

            traceback.print_exc()
        return 1


if __name__ == "__main__":
    sys.exit(main())
