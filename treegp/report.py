"""
treegp/report.py - Run reporting and logger setup
"""
import sys
from typing import TYPE_CHECKING

from loguru import logger

from .config import RunConfig
from .export import tree_to_string

if TYPE_CHECKING:
    from .engine import BestOfRun
    from .population import Population

CONSOLE_FORMAT = (
    "<green>{time:HH:mm:ss.SSS}</green> | "
    "<level>{level: <8}</level> | "
    "<level>{message}</level>"
)


def setup_logger(level: str = "INFO") -> None:
    """Replace loguru's default sink with a formatted stderr sink"""
    logger.remove()
    logger.add(lambda msg: sys.stderr.write(msg), level=level, format=CONSOLE_FORMAT,
               colorize=sys.stderr.isatty())


class Reporter:
    """Receives progress from the evolution loop; the base class ignores it"""

    def describe_parameters(self, config: RunConfig, maximum_generations: int,
                            population_size: int) -> None:
        pass

    def report_on_generation(self, generation: int, population: 'Population') -> None:
        pass

    def report_on_run(self, best_of_run: 'BestOfRun') -> None:
        pass


class LoggingReporter(Reporter):
    """Writes run progress to the loguru logger"""

    def describe_parameters(self, config: RunConfig, maximum_generations: int,
                            population_size: int) -> None:
        lines = [
            "Parameters used for this run",
            f"  Maximum number of generations: {maximum_generations}",
            f"  Size of population: {population_size}",
            f"  Maximum depth of new individuals: {config.max_depth_for_new_individuals}",
            f"  Maximum depth of new subtrees for mutants: {config.max_depth_for_new_subtrees_in_mutants}",
            f"  Maximum depth of individuals after crossover: "
            f"{config.max_depth_for_individuals_after_crossover}",
            f"  Fitness-proportionate reproduction fraction: "
            f"{config.fitness_proportionate_reproduction_fraction:g}",
            f"  Crossover at any point fraction: {config.crossover_at_any_point_fraction:g}",
            f"  Crossover at function points fraction: {config.crossover_at_function_point_fraction:g}",
            f"  Number of fitness cases: {config.number_of_fitness_cases}",
            f"  Selection method: {config.method_of_selection.value}",
            f"  Generation method: {config.method_of_generation.value}",
            f"  Randomizer seed: {config.seed}",
        ]
        logger.info('\n'.join(lines))

    def report_on_generation(self, generation: int, population: 'Population') -> None:
        best = population.best
        stats = population.get_stats()
        logger.info(f"Generation {generation}: average standardized fitness = "
                    f"{stats['standardized_fitness']['mean']:g}; "
                    f"best = {best.standardized_fitness:g} with {best.hits} hits: "
                    f"{tree_to_string(best.program)}")
        logger.debug(f"Generation {generation}: depth mean {stats['depth']['mean']:.2f} "
                     f"max {stats['depth']['max']:g}; size mean {stats['size']['mean']:.2f} "
                     f"max {stats['size']['max']:g}")

    def report_on_run(self, best_of_run: 'BestOfRun') -> None:
        individual = best_of_run.individual
        logger.info(f"Best-of-run individual found on generation {best_of_run.generation} "
                    f"had standardized fitness {individual.standardized_fitness:g} and "
                    f"{individual.hits} hits: {tree_to_string(individual.program)}")
