from genetic_tsp.data import random_instance
from genetic_tsp.evolutionary import EvolutionConfig, Population


def main():
    instance = random_instance(12, seed=7)
    cfg = EvolutionConfig(
        population_size=30,
        crossover_rate=0.9,
        mutation_rate=0.3,
        elitism=True,
        generation_count=50,
        random_seed=7,
    )
    population = Population(instance.distance_mat(), cfg)
    for g in range(5):
        stats = population.step()
        print(f"gen {g+1}: best={stats.best:.2f} mean={stats.mean:.2f}")
    best, length = population.run(cfg.generation_count)
    print(f"after {population.generation} generations: length={length:.2f} tour={best.tour}")


if __name__ == "__main__":
    main()
