"""
treegp/individual.py - A program together with its fitness measures
"""
import sys
from typing import Any, Dict, Optional

from .ast_nodes import ASTNode, Placeholder, node_from_dict


class Individual:
    """One population slot: a program and its fitness measures"""

    def __init__(self, program: Optional[ASTNode] = None):
        # An unfilled slot holds a placeholder that refuses evaluation
        self.program = program if program is not None else Placeholder()
        self.standardized_fitness = 0.0
        self.adjusted_fitness = 0.0
        self.normalized_fitness = 0.0
        self.hits = 0

    @classmethod
    def sentinel(cls) -> 'Individual':
        """Worst possible individual, beaten by any evaluated one"""
        worst = cls()
        worst.standardized_fitness = sys.float_info.max
        worst.adjusted_fitness = sys.float_info.max
        worst.normalized_fitness = sys.float_info.max
        return worst

    def zeroize(self) -> None:
        """Clear the fitness measures"""
        self.standardized_fitness = 0.0
        self.adjusted_fitness = 0.0
        self.normalized_fitness = 0.0
        self.hits = 0

    def copy(self) -> 'Individual':
        """Create a deep copy of this individual"""
        new_individual = Individual(self.program.copy())
        new_individual.standardized_fitness = self.standardized_fitness
        new_individual.adjusted_fitness = self.adjusted_fitness
        new_individual.normalized_fitness = self.normalized_fitness
        new_individual.hits = self.hits
        return new_individual

    def to_dict(self) -> Dict[str, Any]:
        return {
            'program': self.program.to_dict(),
            'standardized_fitness': self.standardized_fitness,
            'adjusted_fitness': self.adjusted_fitness,
            'normalized_fitness': self.normalized_fitness,
            'hits': self.hits,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Individual':
        individual = cls(node_from_dict(data['program']))
        individual.standardized_fitness = data.get('standardized_fitness', 0.0)
        individual.adjusted_fitness = data.get('adjusted_fitness', 0.0)
        individual.normalized_fitness = data.get('normalized_fitness', 0.0)
        individual.hits = data.get('hits', 0)
        return individual

    def __str__(self) -> str:
        return (f"standardized={self.standardized_fitness:g} hits={self.hits} "
                f"program={self.program}")
