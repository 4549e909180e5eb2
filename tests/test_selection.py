import pytest

from treegp.ast_nodes import Constant
from treegp.config import SelectionMethod
from treegp.errors import ConfigurationError
from treegp.selection import (fitness_proportionate_selection, over_selection_target, select,
                              tournament_selection)

from .helpers import add, make_individual, x


class ScriptedRng:
    """Stands in for numpy's Generator, replaying fixed draws"""

    def __init__(self, integers=(), randoms=()):
        self._integers = list(integers)
        self._randoms = list(randoms)

    def integers(self, n):
        value = self._integers.pop(0)
        assert 0 <= value < n
        return value

    def random(self):
        return self._randoms.pop(0)


def ranked_population(normalized):
    population = []
    for index, value in enumerate(normalized):
        individual = make_individual(float(index), add(x(), Constant(float(index))))
        individual.normalized_fitness = value
        population.append(individual)
    return population


class TestTournament:
    def test_better_individual_wins(self):
        population = [make_individual(3.0), make_individual(1.0)]
        assert tournament_selection(population, ScriptedRng([0, 1])) is population[1].program
        assert tournament_selection(population, ScriptedRng([1, 0])) is population[1].program

    def test_tie_goes_to_second_draw(self):
        population = [make_individual(2.0), make_individual(2.0)]
        assert tournament_selection(population, ScriptedRng([0, 1])) is population[1].program

    def test_same_individual_twice(self):
        population = [make_individual(3.0), make_individual(1.0)]
        assert tournament_selection(population, ScriptedRng([0, 0])) is population[0].program

    def test_draws_cover_population(self, rng):
        population = [make_individual(float(i)) for i in range(5)]
        winners = {id(tournament_selection(population, rng)) for _ in range(300)}
        # The worst individual can only win against itself
        assert len(winners) == 5


class TestFitnessProportionate:
    @pytest.mark.parametrize('target, expected', [
        (0.0, 0), (0.49, 0), (0.5, 1), (0.79, 1), (0.85, 2), (0.99, 2),
    ])
    def test_scan(self, target, expected):
        population = ranked_population([0.5, 0.3, 0.2])
        assert fitness_proportionate_selection(population, target) is population[expected].program

    def test_exhausted_scan_returns_last(self):
        population = ranked_population([0.5, 0.3, 0.1999999])
        assert fitness_proportionate_selection(population, 0.9999999999) is population[-1].program


class TestOverSelection:
    def test_small_population_rejected(self, rng):
        with pytest.raises(ConfigurationError):
            over_selection_target(999, rng)

    def test_select_refuses_small_population(self, rng):
        population = ranked_population([0.25] * 4)
        with pytest.raises(ConfigurationError):
            select(population, SelectionMethod.OVER_SELECTION, rng)

    def test_targets_favour_elite_slice(self, rng):
        targets = [over_selection_target(1000, rng) for _ in range(4000)]
        assert all(0.0 <= target < 1.0 for target in targets)
        elite = sum(target < 0.32 for target in targets) / len(targets)
        assert 0.75 < elite < 0.85

    def test_select_dispatch(self, rng):
        population = ranked_population([0.001] * 1000)
        program = select(population, SelectionMethod.OVER_SELECTION, rng)
        assert any(program is individual.program for individual in population)


@pytest.mark.parametrize('method', [SelectionMethod.TOURNAMENT, SelectionMethod.FITNESS_PROPORTIONATE])
def test_select_returns_member_program(rng, method):
    population = ranked_population([0.4, 0.3, 0.2, 0.1])
    for _ in range(20):
        program = select(population, method, rng)
        assert any(program is individual.program for individual in population)
