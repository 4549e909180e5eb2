"""
treegp/cli.py - Command-line interface
"""
import functools
import json
import time

import click

from .ast_nodes import ASTNode, node_from_dict
from .config import GenerationMethod, SelectionMethod
from .engine import run_genetic_programming_system
from .errors import TreeGPError
from .export import population_table, tree_to_string, tree_to_tex
from .individual import Individual
from .problems import regression
from .report import setup_logger


def load_program(filename: str) -> ASTNode:
    """Read a program from JSON, either a bare tree or a saved individual"""
    try:
        with open(filename, 'r') as f:
            data = json.load(f)
        if 'program' in data:
            return Individual.from_dict(data).program
        return node_from_dict(data)
    except (AttributeError, KeyError, ValueError, TypeError) as e:
        raise click.ClickException(f"{filename} does not contain a program: {e}") from e


@click.group()
def cli():
    """treegp - Genetic programming over expression trees"""
    pass


@cli.command()
@click.option('--seed', '-s', default=1, help='Seed for the random number generator')
@click.option('--generations', '-g', default=31, help='Maximum number of generations')
@click.option('--population', '-p', default=200, help='Population size')
@click.option('--cases', default=10, help='Number of regression fitness cases')
@click.option('--selection', type=click.Choice([m.value for m in SelectionMethod]),
              help='Override the selection method')
@click.option('--generation-method', type=click.Choice([m.value for m in GenerationMethod]),
              help='Override the generation method')
@click.option('--seed-program', multiple=True, type=click.Path(exists=True, dir_okay=False),
              help='JSON program to place in generation 0 (repeatable)')
@click.option('--out', '-o', type=click.Path(dir_okay=False), help='Write the best-of-run individual as JSON')
@click.option('--tex', type=click.Path(dir_okay=False), help='Write the best-of-run program as LaTeX')
@click.option('--verbose', '-v', is_flag=True, help='Verbose output')
def evolve(seed, generations, population, cases, selection, generation_method,
           seed_program, out, tex, verbose):
    """Evolve a program for the bundled regression problem"""
    setup_logger("DEBUG" if verbose else "INFO")

    overrides = {}
    if selection:
        overrides['method_of_selection'] = SelectionMethod(selection)
    if generation_method:
        overrides['method_of_generation'] = GenerationMethod(generation_method)
    seeded_programs = [load_program(filename) for filename in seed_program]

    start_time = time.time()
    try:
        result = run_genetic_programming_system(functools.partial(regression, cases),
                                                seed, generations, population,
                                                seeded_programs, config_overrides=overrides)
    except TreeGPError as e:
        raise click.ClickException(str(e)) from e
    total_time = time.time() - start_time

    best = result.best_of_run
    click.echo(f"Ran {result.generations} generation(s) in {total_time:.1f}s")
    click.echo(f"Best of run (generation {best.generation}): "
               f"standardized fitness {best.individual.standardized_fitness:g}, "
               f"{best.individual.hits} hits")
    click.echo(tree_to_string(best.individual.program))

    if verbose:
        click.echo("Final population:")
        click.echo(population_table(result.population))

    if out:
        data = best.individual.to_dict()
        data['generation'] = best.generation
        with open(out, 'w') as f:
            json.dump(data, f, indent=2)
        click.echo(f"Best-of-run individual saved: {out}")

    if tex:
        with open(tex, 'w') as f:
            f.write(tree_to_tex(best.individual.program))
        click.echo(f"LaTeX saved: {tex}")


@cli.command()
@click.argument('program_file', type=click.Path(exists=True, dir_okay=False))
@click.option('--tex', is_flag=True, help='Also print the LaTeX rendering')
def show(program_file, tex):
    """Print a program saved as JSON"""
    program = load_program(program_file)
    click.echo(tree_to_string(program))
    try:
        click.echo(f"Depth: {program.get_depth()}, Size: {program.size()}")
    except TreeGPError as e:
        raise click.ClickException(str(e)) from e
    if tex:
        click.echo(tree_to_tex(program))


if __name__ == '__main__':
    cli()
