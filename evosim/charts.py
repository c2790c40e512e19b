import os

import numpy as np

from .sim import Simulation


def _line_chart(plt, x, y, title, ylabel, color, path):
    plt.figure(figsize=(10, 6), dpi=150)
    plt.plot(x, y, lw=3, color=color)
    plt.title(title, fontsize=16, fontweight='bold')
    plt.xlabel("Generation", fontsize=12)
    plt.ylabel(ylabel, fontsize=12)
    plt.grid(True, alpha=0.3)
    plt.tight_layout()
    plt.savefig(path, dpi=150, bbox_inches='tight')
    plt.close()


def final_charts(sim: Simulation, output_dir: str = "simulation_results"):
    """Save per-generation charts of the run and print a short summary."""
    import matplotlib
    matplotlib.use("Agg")
    import matplotlib.pyplot as plt

    if not sim.history:
        print("No completed generations to plot")
        return []

    os.makedirs(output_dir, exist_ok=True)
    gens = np.array([h.generation for h in sim.history])
    n = len(gens)
    written = []

    series = [
        ("population_evolution.png", [h.agent_count for h in sim.history],
         f"Population at Generation End - {n} Generations", "Agents", '#1f77b4'),
        ("species_evolution.png", [h.species_count for h in sim.history],
         f"Active Species - {n} Generations", "Species", '#9467bd'),
        ("mutation_rate_evolution.png", [h.avg_mutation_rate for h in sim.history],
         f"Average Mutation Rate - {n} Generations", "Mutation Rate", '#ff7f0e'),
    ]
    for filename, values, title, ylabel, color in series:
        path = os.path.join(output_dir, filename)
        _line_chart(plt, gens, values, title, ylabel, color, path)
        written.append(path)

    # Fitness: average and best on one chart
    path = os.path.join(output_dir, "fitness_evolution.png")
    plt.figure(figsize=(10, 6), dpi=150)
    plt.plot(gens, [h.avg_fitness for h in sim.history], lw=3, color='#2ca02c', label="Average")
    plt.plot(gens, [h.max_fitness for h in sim.history], lw=2, color='#d62728', label="Best")
    plt.title(f"Fitness Evolution - {n} Generations", fontsize=16, fontweight='bold')
    plt.xlabel("Generation", fontsize=12)
    plt.ylabel("Fitness (age + energy)", fontsize=12)
    plt.legend()
    plt.grid(True, alpha=0.3)
    plt.tight_layout()
    plt.savefig(path, dpi=150, bbox_inches='tight')
    plt.close()
    written.append(path)

    # Counters per generation: one line per key
    counters = [
        ("food_consumption.png", "food_consumed", "Food Eaten per Generation", "Items eaten"),
        ("death_causes.png", "death_causes", "Deaths per Generation by Cause", "Deaths"),
    ]
    for filename, attr, title, ylabel in counters:
        path = os.path.join(output_dir, filename)
        plt.figure(figsize=(10, 6), dpi=150)
        for key in getattr(sim.history[-1], attr):
            plt.plot(gens, [getattr(h, attr).get(key, 0) for h in sim.history], lw=2, label=key)
        plt.title(f"{title} - {n} Generations", fontsize=16, fontweight='bold')
        plt.xlabel("Generation", fontsize=12)
        plt.ylabel(ylabel, fontsize=12)
        plt.legend()
        plt.grid(True, alpha=0.3)
        plt.tight_layout()
        plt.savefig(path, dpi=150, bbox_inches='tight')
        plt.close()
        written.append(path)

    # Species best fitness, including dormant species
    species = sim.species_manager.species
    if species:
        path = os.path.join(output_dir, "species_best_fitness.png")
        plt.figure(figsize=(10, 6), dpi=150)
        colors = [tuple(c / 255 for c in sp.color) for sp in species]
        plt.bar([sp.id for sp in species], [sp.best_fitness for sp in species], color=colors, edgecolor='black')
        plt.title("Best Fitness per Species", fontsize=16, fontweight='bold')
        plt.xlabel("Species id", fontsize=12)
        plt.ylabel("Best fitness", fontsize=12)
        plt.grid(True, alpha=0.3)
        plt.tight_layout()
        plt.savefig(path, dpi=150, bbox_inches='tight')
        plt.close()
        written.append(path)

    print(f"\n=== SIMULATION SUMMARY ===")
    print(f"Generations completed: {n}")
    print(f"Final population: {len(sim.agents)}")
    print(f"Species ever created: {len(species)}")
    print(f"Lineage records: {len(sim.lineage)}")
    print(f"Best fitness: {max(h.max_fitness for h in sim.history):.1f}")
    print(f"\n📊 Charts saved to '{output_dir}/' directory:")
    for p in written:
        print(f"  • {os.path.basename(p)}")
    print("========================\n")
    return written
