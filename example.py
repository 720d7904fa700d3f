#!/usr/bin/env python3
"""
Example usage of the lifegrid package.
"""

from lifegrid import Universe, Simulation, PatternLibrary


def main():
    """Demonstrate programmatic usage of the lifegrid package."""
    universe = Universe(10, 10)
    simulation = Simulation(universe)

    library = PatternLibrary()
    pair = library.get_pattern("Diagonal Pair")

    if pair:
        pair.apply_to_universe(universe, offset_x=4, offset_y=4)

        print("Initial state:")
        print(universe.render())
        print(f"Population: {simulation.population}")
        print()

        for _ in range(4):
            simulation.step()
            print(f"Generation {simulation.generation}:")
            print(universe.render())
            print(f"Population: {simulation.population}")

            if simulation.cycle_detected:
                print(f"Cycle detected! Length: {simulation.cycle_length}")
                break

            print()

    stats = simulation.get_statistics()
    print("Final statistics:")
    for key, value in stats.items():
        print(f"  {key}: {value}")


if __name__ == "__main__":
    main()
