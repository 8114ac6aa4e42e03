"""Time series data structures."""
from dataclasses import dataclass, asdict, field
from typing import List
import pandas as pd


@dataclass
class TimeSeries:
    """Per-step diagnostics common to all solvers.

    Parameters
    ----------
    divergence : List[float]
        Mean absolute divergence over interior cells after each step.
    kinetic_energy : List[float], optional
        ``0.5 * sum(u^2 + v^2)`` after each step.
    max_speed : List[float], optional
        Largest velocity magnitude after each step.
    pressure_residual : List[float], optional
        Relative residual of the relaxed pressure Poisson solve.
    """
    divergence: List[float] = field(default_factory=list)
    kinetic_energy: List[float] = field(default_factory=list)
    max_speed: List[float] = field(default_factory=list)
    pressure_residual: List[float] = field(default_factory=list)

    def to_dataframe(self) -> pd.DataFrame:
        """Convert time series to DataFrame for analysis and plotting.

        Returns
        -------
        pd.DataFrame
            DataFrame with one column per diagnostic. Index is the step number.
        """
        return pd.DataFrame(asdict(self))
