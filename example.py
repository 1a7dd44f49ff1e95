#!/usr/bin/env python3
"""
Example usage of the lifegrid package.
"""

from lifegrid import World, GameOfLife, PatternLibrary


def main():
    """Demonstrate programmatic usage of the lifegrid package."""
    world = World(12, 12)
    game = GameOfLife(world)

    library = PatternLibrary()
    glider = library.get_pattern("Glider")

    if glider:
        glider.apply_to_world(world, offset_row=1, offset_col=1)

        print("Initial state:")
        print(world.render("#", "."), end="")
        print(f"Population: {game.population}")
        print()

        for _ in range(8):
            game.step()
            print(f"Generation {game.generation}:")
            print(world.render("#", "."), end="")

    stats = game.get_statistics()
    print("Final statistics:")
    for key, value in stats.items():
        print(f"  {key}: {value}")


if __name__ == "__main__":
    main()
