"""Generation failures reported to callers."""


class LayoutGenerationError(ValueError):
    """Base class for configurations that cannot produce a layout."""


class InfeasiblePartitionError(LayoutGenerationError):
    """A territory dimension is too small for the minimum grid cell size."""

    def __init__(self, total: float, min_size: float, message: str = None):
        self.total = total
        self.min_size = min_size
        super().__init__(
            message
            or f"Cannot fit cells with min size {min_size} into total size {total}."
        )


class InfeasibleTerritoryError(LayoutGenerationError):
    """The team territory is narrower than the placement minimum."""

    def __init__(self, team_width: float, minimum: float):
        self.team_width = team_width
        self.minimum = minimum
        super().__init__(
            f"Each team's territory must be at least {minimum} units wide. "
            f"Your 'Team Width' is set to {team_width}. "
            "Please increase it to allow enough space for point placement."
        )
