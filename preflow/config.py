"""Configuration classes for preflow components."""

from dataclasses import dataclass
from typing import Optional


@dataclass
class SolverConfig:
    """Run-time knobs for the push-relabel solver."""

    # Upper bound on push/relabel iterations; None runs to completion
    max_iterations: Optional[int] = None

    # Emit a DEBUG progress record every N iterations; 0 disables it
    progress_log_interval: int = 10000

    # Seed for AdmissibleSelect.RANDOM_ADMISSIBLE when none is given explicitly
    default_random_seed: Optional[int] = None

    def __post_init__(self) -> None:
        if self.max_iterations is not None and self.max_iterations < 0:
            raise ValueError(
                f"max_iterations must be non-negative, got {self.max_iterations}"
            )
        if self.progress_log_interval < 0:
            raise ValueError(
                "progress_log_interval must be non-negative, "
                f"got {self.progress_log_interval}"
            )

    def iteration_limit_reached(self, iterations: int) -> bool:
        """Return True once ``iterations`` exceeds the configured cap."""
        return self.max_iterations is not None and iterations > self.max_iterations

    def should_log_progress(self, iterations: int) -> bool:
        """Return True when ``iterations`` falls on a progress-log boundary."""
        return (
            self.progress_log_interval > 0
            and iterations % self.progress_log_interval == 0
        )


# Global configuration instance
SOLVER_CONFIG = SolverConfig()
