import argparse
import time
from pathlib import Path

from genetic_tsp.data import Instance, load_instance, random_instance
from genetic_tsp.evaluation import GenerationStats
from genetic_tsp.evolutionary import EvolutionConfig, Population
from genetic_tsp.routes import MUTATION_POLICIES
from genetic_tsp.selection import SELECTION_POLICIES


def log(msg: str) -> None:
    ts = time.strftime("%H:%M:%S")
    print(f"[{ts}] {msg}", flush=True)


def _positive_int(value: str) -> int:
    number = int(value)
    if number < 1:
        raise argparse.ArgumentTypeError(f"expected a positive integer, got {value}")
    return number


def _load(args) -> Instance:
    if args.instance:
        return load_instance(Path(args.instance))
    return random_instance(args.random, seed=args.seed)


def _config_from_args(args) -> EvolutionConfig:
    return EvolutionConfig(
        population_size=args.population_size,
        crossover_rate=args.crossover_rate,
        mutation_rate=args.mutation_rate,
        elitism=not args.no_elitism,
        generation_count=args.generations,
        selection=args.selection,
        tournament_size=args.tournament_size,
        mutation=args.mutation,
        random_seed=args.seed,
        device=args.device,
    )


def run(args) -> None:
    t0 = time.perf_counter()
    instance = _load(args)
    distance_mat = instance.distance_mat()
    log(f"loaded {instance.name} ({distance_mat.n_units()} nodes) in {time.perf_counter() - t0:.2f}s")

    cfg = _config_from_args(args)
    population = Population(distance_mat, cfg)
    log(
        f"evolving {cfg.population_size} routes for {cfg.generation_count} generations "
        f"(selection={cfg.selection}, mutation={cfg.mutation}, elitism={cfg.elitism})"
    )

    def report(pop: Population, stats: GenerationStats) -> None:
        if stats.generation % args.report_every == 0 or stats.generation == cfg.generation_count:
            print(
                f"gen {stats.generation}: best={stats.best:.2f} mean={stats.mean:.2f} "
                f"worst={stats.worst:.2f} best_so_far={pop.best_fitness:.2f}"
            )

    t_run = time.perf_counter()
    best, length = population.run(cfg.generation_count, callback=report)
    log(f"finished in {time.perf_counter() - t_run:.2f}s")
    print(f"best length: {length:.2f}")
    if instance.optimum:
        gap = (length - instance.optimum) / instance.optimum
        print(f"known optimum: {instance.optimum:.2f} (gap {gap:.2%})")
    print("tour: " + " ".join(str(label) for label in instance.labels(best.tour)))


def main(argv=None):
    parser = argparse.ArgumentParser(description="Genetic algorithm for the Traveling Salesman Problem")
    subparsers = parser.add_subparsers(dest="command", required=True)

    run_parser = subparsers.add_parser("run", help="Evolve tours for a TSPLIB or random instance")
    source = run_parser.add_mutually_exclusive_group(required=True)
    source.add_argument("--instance", help="Path to a symmetric TSPLIB .tsp file")
    source.add_argument("--random", type=int, help="Generate a random Euclidean instance with N nodes")
    run_parser.add_argument("--population-size", type=int, default=50)
    run_parser.add_argument("--generations", type=int, default=200)
    run_parser.add_argument("--crossover-rate", type=float, default=0.8)
    run_parser.add_argument("--mutation-rate", type=float, default=0.2)
    run_parser.add_argument("--no-elitism", action="store_true")
    run_parser.add_argument("--selection", choices=sorted(SELECTION_POLICIES), default="roulette")
    run_parser.add_argument("--tournament-size", type=int, default=3)
    run_parser.add_argument("--mutation", choices=sorted(MUTATION_POLICIES), default="swap")
    run_parser.add_argument("--seed", type=int, default=123)
    run_parser.add_argument("--device", default="cpu")
    run_parser.add_argument("--report-every", type=_positive_int, default=10)
    run_parser.set_defaults(func=run)

    args = parser.parse_args(argv)
    args.func(args)


if __name__ == "__main__":
    main()
