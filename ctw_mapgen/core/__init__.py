"""
Core layout generation functionality.
"""

from .errors import InfeasiblePartitionError, InfeasibleTerritoryError, LayoutGenerationError
from .generator_config import (
    DistanceConstraint,
    GeneratorConfig,
    IslandGenerationConfig,
    PathingEnhancements,
)
from .layout_generator import generate_layout
from .lcg_prng import LcgPRNG
from .models import (
    Edge,
    EdgeType,
    GridMode,
    MapLayout,
    Node,
    Point,
    StrategicPointType,
    SymmetryMode,
    Team,
    TeamLayout,
    Zone,
)

__all__ = ['InfeasiblePartitionError', 'InfeasibleTerritoryError', 'LayoutGenerationError',
           'DistanceConstraint', 'GeneratorConfig', 'IslandGenerationConfig', 'PathingEnhancements',
           'generate_layout', 'LcgPRNG',
           'Edge', 'EdgeType', 'GridMode', 'MapLayout', 'Node', 'Point', 'StrategicPointType',
           'SymmetryMode', 'Team', 'TeamLayout', 'Zone']
