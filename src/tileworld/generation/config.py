"""Generation configuration models."""

from pydantic import BaseModel, Field, model_validator

from ..types import Color


class RoadConfig(BaseModel):
    """Road grid parameters."""

    width: int = Field(default=20, ge=0, description="Grid width in tiles")
    height: int = Field(default=20, ge=0, description="Grid height in tiles")
    noise_scale: float = Field(
        default=0.4, gt=0, description="Noise frequency per tile"
    )
    threshold: float = Field(
        default=0.5, description="Noise value above which a cell is road"
    )


class TreeConfig(BaseModel):
    """Fractal tree parameters."""

    max_depth: int = Field(default=6, ge=0, description="Recursion depth")
    branch_length: float = Field(default=5.0, description="Trunk length")
    initial_angle: float = Field(
        default=90.0, description="Trunk angle in degrees (90 = straight up)"
    )
    angle_variance: float = Field(
        default=50.0, description="Max random angle change per branch (degrees)"
    )
    length_multiplier: float = Field(
        default=0.6, description="Length factor applied per level"
    )
    start_width: float = Field(default=0.1, description="Trunk width")
    end_width: float = Field(default=0.01, description="Thinnest branch width")
    min_width: float = Field(default=0.02, description="Floor applied to widths")
    start_color: Color = Field(
        default_factory=lambda: Color(r=0.1, g=0.1, b=0.1),
        description="Trunk colour",
    )
    end_color: Color = Field(
        default_factory=lambda: Color(r=0.6, g=0.1, b=0.1),
        description="Tip colour",
    )
    min_branches: int = Field(default=3, ge=0, description="Min children per branch")
    max_branches: int = Field(default=4, ge=0, description="Max children per branch")

    @model_validator(mode="after")
    def check_branch_range(self) -> "TreeConfig":
        if self.max_branches < self.min_branches:
            raise ValueError(
                f"max_branches ({self.max_branches}) must be >= "
                f"min_branches ({self.min_branches})"
            )
        return self


class PlacementConfig(BaseModel):
    """Tree scattering parameters."""

    tree_count: int = Field(default=55, ge=0, description="Trees to place")
    min_tree_distance: float = Field(
        default=0.01, ge=0, description="Min distance between trees"
    )
    max_attempts: int | None = Field(
        default=100_000,
        gt=0,
        description="Candidate draws before giving up (None = retry forever)",
    )


class GenerationConfig(BaseModel):
    """Complete generation configuration."""

    seed: int | None = Field(
        default=None,
        description="Noise seed offset (None = roll one per run)",
    )
    rng_seed: int | None = Field(
        default=None,
        description="Seed for branch and placement randomness (None = fresh entropy)",
    )

    roads: RoadConfig = Field(default_factory=RoadConfig)
    trees: TreeConfig = Field(default_factory=TreeConfig)
    placement: PlacementConfig = Field(default_factory=PlacementConfig)
