"""Configuration for layout generation."""

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel
from typing import Literal

from ..config import settings
from .models import GridMode, SymmetryMode


class _CamelModel(BaseModel):
    """Accepts both snake_case names and the camelCase keys used in saved configs."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class DistanceConstraint(_CamelModel):
    """Allowed horizontal distance between an objective and its entry."""

    min: float = Field(10, ge=0, description="Minimum distance")
    max: float = Field(25, ge=0, description="Maximum distance")

    @model_validator(mode="after")
    def _check_order(self):
        if self.min > self.max:
            raise ValueError(f"min ({self.min}) must not exceed max ({self.max})")
        return self


class IslandGenerationConfig(_CamelModel):
    enabled: bool = True
    max_islands_per_team: int = Field(2, ge=0)
    spawn_in_fourth_column: bool = Field(True, description="2-team layouts only")
    spawn_in_center_gap: bool = True
    spawn_in_empty_zones: bool = True


class PathingEnhancements(_CamelModel):
    enable_wool_flank_routes: bool = True
    enable_spawn_wool_rush_route: bool = False


class GeneratorConfig(_CamelModel):
    """
    Everything a generation run depends on besides the code itself.

    Two runs with equal configs produce identical layouts.
    """

    team_width: float = Field(90, gt=0, description="Width of one team territory (quadrant size for 4 teams)")
    team_height: float = Field(160, gt=0, description="Height of one team territory")
    team_gap: float = Field(24, ge=0, description="Gap between territories (center area for 4 teams)")
    lane_width: float = Field(4, gt=0, description="Lane width, passed through to the layout")
    seed: int = Field(default_factory=lambda: settings.default_seed, description="Random seed")
    grid_mode: GridMode = GridMode.STANDARD
    symmetry_mode: SymmetryMode = SymmetryMode.ROTATION
    symmetrical_team_layout: bool = Field(False, description="Mirror each territory top/bottom")
    spawn_entry_distance: DistanceConstraint = Field(default_factory=DistanceConstraint)
    wool_entry_distance: DistanceConstraint = Field(default_factory=DistanceConstraint)
    frontline_entry_distance: DistanceConstraint = Field(default_factory=DistanceConstraint)
    island_generation: IslandGenerationConfig = Field(default_factory=IslandGenerationConfig)
    pathing_enhancements: PathingEnhancements = Field(default_factory=PathingEnhancements)
    num_teams: Literal[2, 4] = 2
    wools_per_team: Literal[1, 2] = Field(2, description="4-team layouts only")

    @property
    def effective_grid_mode(self) -> GridMode:
        """Row-independent columns would break the territory mirror axis."""
        if self.symmetrical_team_layout:
            return GridMode.STANDARD
        return self.grid_mode
