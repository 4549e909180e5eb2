import pytest
from loguru import logger

from treegp.population import Population
from treegp.report import LoggingReporter

from .helpers import add, make_individual, mul, x


@pytest.fixture
def messages():
    records = []
    handler_id = logger.add(records.append, level="DEBUG", format="{level} {message}")
    yield records
    logger.remove(handler_id)


def test_generation_report_uses_population_stats(messages):
    population = Population([make_individual(1.0, add(x(), x())),
                             make_individual(3.0, mul(x(), add(x(), x())))])
    population[0].hits = 4

    LoggingReporter().report_on_generation(7, population)

    info = [m for m in messages if m.startswith("INFO")]
    debug = [m for m in messages if m.startswith("DEBUG")]
    assert "Generation 7: average standardized fitness = 2; best = 1 with 4 hits: (x + x)" in info[0]
    assert "depth mean 2.50 max 3; size mean 4.00 max 5" in debug[0]
