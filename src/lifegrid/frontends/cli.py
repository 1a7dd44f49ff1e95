"""Command-line driver for Conway's Game of Life."""

import argparse
import sys
import time
from typing import Optional, TextIO, Tuple

from ..core.world import World, make_random_source
from ..core.game import GameOfLife
from ..core.patterns import PatternLibrary


class CLIGameOfLife:
    """Command-line interface that runs a world and prints every generation."""

    def __init__(self, output: Optional[TextIO] = None) -> None:
        """Initialize CLI interface.

        Args:
            output: Stream generations are rendered to (defaults to stdout)
        """
        self.pattern_library = PatternLibrary()
        self.output = output

    def build_game(
        self,
        rows: int,
        cols: int,
        seed: Optional[int] = None,
        pattern: Optional[str] = None,
        pattern_row: Optional[int] = None,
        pattern_col: Optional[int] = None,
        verbose: bool = False,
    ) -> GameOfLife:
        """Create a world and seed it either randomly or from a pattern.

        Args:
            rows: Number of rows
            cols: Number of columns
            seed: Random seed for reproducible seeding
            pattern: Optional pattern name to stamp instead of random seeding
            pattern_row: Row offset for the pattern (centred when None)
            pattern_col: Column offset for the pattern (centred when None)
            verbose: Print progress updates

        Returns:
            Game wrapping the seeded world
        """
        world = World(rows, cols, random_source=make_random_source(seed))

        if verbose:
            print(f"Initializing {rows}x{cols} world")

        loaded_pattern = self.pattern_library.get_pattern(pattern) if pattern else None
        if loaded_pattern:
            size = loaded_pattern.get_size()
            if pattern_row is None:
                pattern_row = max(0, (rows - size[0]) // 2)
            if pattern_col is None:
                pattern_col = max(0, (cols - size[1]) // 2)
            if verbose:
                print(f"Loading pattern '{pattern}' at ({pattern_row}, {pattern_col})")
            loaded_pattern.apply_to_world(world, pattern_row, pattern_col)
        else:
            if pattern:
                print(f"Warning: Pattern '{pattern}' not found, using random population")
            if verbose:
                seed_note = f" (seed: {seed})" if seed is not None else ""
                print(f"Generating random population{seed_note}")
            world.randomize_seed()

        return GameOfLife(world)

    def run_simulation(
        self,
        game: GameOfLife,
        iterations: int,
        delay: float,
        alive_char: str = "1",
        dead_char: str = "0",
        quiet: bool = False,
        verbose: bool = False,
    ) -> Tuple[int, dict]:
        """Step and render a game for a fixed number of generations.

        Args:
            game: Seeded game to run
            iterations: Number of generations
            delay: Pause between generations, in seconds
            alive_char: Character for living cells
            dead_char: Character for dead cells
            quiet: Skip rendering generations
            verbose: Print progress updates

        Returns:
            Tuple of (final_generation, statistics)
        """
        initial_population = game.population

        if verbose:
            print(f"Initial population: {initial_population} cells")
            print(f"\nRunning {iterations} generations ({delay:g}s delay)...")

        def render(current: GameOfLife) -> None:
            stream = self.output or sys.stdout
            stream.write(current.world.render(alive_char, dead_char))
            stream.flush()

        start_time = time.time()
        final_generation = game.run(iterations, delay, on_generation=None if quiet else render)
        duration = time.time() - start_time

        stats = game.get_statistics()
        stats["duration_seconds"] = duration
        stats["generations_per_second"] = final_generation / duration if duration > 0 else 0
        stats["initial_population"] = initial_population
        return final_generation, stats

    def list_patterns(self) -> None:
        """Print the available patterns grouped by category."""
        print("Available patterns:")
        for category, names in self.pattern_library.get_patterns_by_category().items():
            print(f"\n{category}:")
            for name in names:
                pattern = self.pattern_library.get_pattern(name)
                size = pattern.get_size()
                print(f"  {name}: {size[0]}x{size[1]}, {len(pattern.cells)} cells")
                if pattern.description:
                    print(f"    {pattern.description}")


def create_parser() -> argparse.ArgumentParser:
    """Create command-line argument parser.

    Returns:
        Configured ArgumentParser
    """
    parser = argparse.ArgumentParser(
        description="Run Conway's Game of Life in the terminal",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Random 60x180 world, 100 generations, one per second
  lifegrid-cli

  # Small reproducible run without pauses
  lifegrid-cli --rows 20 --cols 40 --seed 7 --delay 0

  # Glider on a 10x10 world drawn with '#' and '.'
  lifegrid-cli -r 10 -c 10 --pattern Glider --alive-char '#' --dead-char '.'

  # List available patterns
  lifegrid-cli --list-patterns
        """,
    )

    # World configuration
    parser.add_argument("-r", "--rows", type=int, default=60, help="Number of rows (default: 60)")

    parser.add_argument("-c", "--cols", type=int, default=180, help="Number of columns (default: 180)")

    parser.add_argument(
        "--seed",
        type=int,
        help="Random seed for reproducible populations",
    )

    # Pattern configuration
    parser.add_argument(
        "--pattern",
        type=str,
        help="Load a specific pattern instead of random population",
    )

    parser.add_argument(
        "--pattern-row",
        type=int,
        help="Row offset for pattern placement (default: centred)",
    )

    parser.add_argument(
        "--pattern-col",
        type=int,
        help="Column offset for pattern placement (default: centred)",
    )

    # Simulation configuration
    parser.add_argument(
        "-n",
        "--iterations",
        type=int,
        default=100,
        help="Number of generations to run (default: 100)",
    )

    parser.add_argument(
        "-d",
        "--delay",
        type=float,
        default=1.0,
        help="Seconds to pause between generations (default: 1.0)",
    )

    # Output configuration
    parser.add_argument("--alive-char", type=str, default="1", help="Character for living cells (default: 1)")

    parser.add_argument("--dead-char", type=str, default="0", help="Character for dead cells (default: 0)")

    parser.add_argument(
        "-q",
        "--quiet",
        action="store_true",
        help="Do not render generations",
    )

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


def print_results(final_generation: int, stats: dict, verbose: bool) -> None:
    """Print simulation results.

    Args:
        final_generation: Final generation number
        stats: Statistics dictionary
        verbose: Whether to show detailed statistics
    """
    print(f"Simulation completed after {final_generation} generations")

    if verbose:
        print("\nDetailed Statistics:")
        print(f"  Grid size: {stats['grid_size'][0]}x{stats['grid_size'][1]}")
        print(f"  Initial population: {stats['initial_population']}")
        print(f"  Final population: {stats['population']}")
        print(f"  Population density: {stats['population_density']:.2%}")
        print(f"  Population change rate: {stats['population_change_rate']:.2f}")
        print(f"  Duration: {stats['duration_seconds']:.3f} seconds")
        print(f"  Speed: {stats['generations_per_second']:.0f} generations/second")

        if stats["bounding_box"]:
            bbox = stats["bounding_box"]
            bbox_size = stats["bounding_box_size"]
            print(f"  Bounding box: ({bbox[0]}, {bbox[1]}) to ({bbox[2]}, {bbox[3]}) [{bbox_size[0]}x{bbox_size[1]}]")
    else:
        print(
            "Population: {} -> {}, Duration: {:.3f}s".format(
                stats["initial_population"], stats["population"], stats["duration_seconds"]
            )
        )


def validate_args(args: argparse.Namespace) -> bool:
    """Validate command-line arguments.

    Args:
        args: Parsed arguments

    Returns:
        True if arguments are valid
    """
    errors = []

    if args.rows < 0:
        errors.append("Rows must be non-negative")

    if args.cols < 0:
        errors.append("Columns must be non-negative")

    if args.iterations < 0:
        errors.append("Iterations must be non-negative")

    if args.delay < 0:
        errors.append("Delay must be non-negative")

    if args.pattern_row is not None and args.pattern_row < 0:
        errors.append("Pattern row offset must be non-negative")

    if args.pattern_col is not None and args.pattern_col < 0:
        errors.append("Pattern column offset must be non-negative")

    if len(args.alive_char) != 1 or len(args.dead_char) != 1:
        errors.append("Alive and dead characters must be single characters")
    elif args.alive_char == args.dead_char:
        errors.append("Alive and dead characters must differ")

    if errors:
        print("Error: Invalid arguments:")
        for error in errors:
            print(f"  - {error}")
        return False

    return True


def main(argv: Optional[list] = None) -> int:
    """Main entry point for CLI interface.

    Args:
        argv: Argument list (defaults to sys.argv[1:])

    Returns:
        Exit code (0 for success, 1 for error)
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    cli = CLIGameOfLife()

    if args.list_patterns:
        cli.list_patterns()
        return 0

    if not validate_args(args):
        return 1

    if args.pattern and cli.pattern_library.get_pattern(args.pattern) is None:
        available = cli.pattern_library.list_patterns()
        print(f"Error: Pattern '{args.pattern}' not found")
        print(f"Available patterns: {', '.join(available)}")
        print("Use --list-patterns to see detailed information")
        return 1

    try:
        game = cli.build_game(
            rows=args.rows,
            cols=args.cols,
            seed=args.seed,
            pattern=args.pattern,
            pattern_row=args.pattern_row,
            pattern_col=args.pattern_col,
            verbose=args.verbose,
        )
        final_generation, stats = cli.run_simulation(
            game,
            iterations=args.iterations,
            delay=args.delay,
            alive_char=args.alive_char,
            dead_char=args.dead_char,
            quiet=args.quiet,
            verbose=args.verbose,
        )

        if args.verbose or args.quiet:
            print_results(final_generation, stats, args.verbose)

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
