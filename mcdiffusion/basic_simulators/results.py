"""Container for simulated choice / reaction-time data."""

from collections.abc import Iterator
from typing import Any

import numpy as np
import pandas as pd

RESULT_COLUMNS = ("coherence", "choice", "rt")


class SimulationResult:
    """Flat table of simulated trials.

    Rows are grouped by coherence level in input order and, within a level,
    ordered by trial index. Undecided trials (no boundary reached within
    ``max_t``) have ``NaN`` for both choice and rt.

    Attributes
    ----------
    data : np.ndarray
        Read-only array of shape (trials * n_coherence, 3) with columns
        coherence, choice (1 upper, 0 lower), rt (seconds).
    metadata : dict
        Seed, grid and boundary information of the run.
    sim_options : dict
        The options the run actually used, with ``random_state`` filled in.
    """

    def __init__(
        self,
        data: np.ndarray,
        metadata: dict[str, Any] | None = None,
        sim_options: dict[str, Any] | None = None,
    ):
        data = np.array(data, dtype=np.float64)
        if data.ndim != 2 or data.shape[1] != len(RESULT_COLUMNS):
            raise ValueError(
                f"Result data must have shape (n, {len(RESULT_COLUMNS)}), got {data.shape}"
            )
        data.setflags(write=False)
        self._data = data
        self.metadata = metadata or {}
        self.sim_options = sim_options or {}

    @property
    def data(self) -> np.ndarray:
        return self._data

    @property
    def coherence(self) -> np.ndarray:
        return self._data[:, 0]

    @property
    def choices(self) -> np.ndarray:
        return self._data[:, 1]

    @property
    def rts(self) -> np.ndarray:
        return self._data[:, 2]

    @property
    def undecided(self) -> np.ndarray:
        """Boolean mask of trials that reached no boundary."""
        return np.isnan(self.choices)

    def to_dataframe(self) -> pd.DataFrame:
        """Return the trials as a DataFrame with columns coherence, choice, rt."""
        return pd.DataFrame(np.array(self._data), columns=list(RESULT_COLUMNS))

    def __len__(self) -> int:
        return self._data.shape[0]

    def __iter__(self) -> Iterator[tuple[float, float, float]]:
        for row in self._data:
            yield tuple(float(x) for x in row)

    def __getitem__(self, idx):
        return self._data[idx]

    def __repr__(self) -> str:
        n_undecided = int(self.undecided.sum())
        return f"SimulationResult({len(self)} trials, {n_undecided} undecided)"


def assemble_results(
    coherence: np.ndarray,
    choices: np.ndarray,
    rts: np.ndarray,
    metadata: dict[str, Any] | None = None,
    sim_options: dict[str, Any] | None = None,
) -> SimulationResult:
    """Flatten per-(trial, coherence) outcomes into a SimulationResult.

    Parameters
    ----------
    coherence : np.ndarray
        Signed coherence, shape (n_coherence,).
    choices, rts : np.ndarray
        Outcomes of shape (trials, n_coherence).

    Returns
    -------
    SimulationResult
        trials * n_coherence rows, coherence-major.
    """
    coherence = np.asarray(coherence, dtype=np.float64)
    trials = choices.shape[0]
    coh_matrix = np.broadcast_to(coherence, (trials, coherence.shape[0]))
    # Column-major flattening keeps all trials of one level together.
    data = np.column_stack(
        [
            coh_matrix.ravel(order="F"),
            choices.ravel(order="F"),
            rts.ravel(order="F"),
        ]
    )
    return SimulationResult(data, metadata=metadata, sim_options=sim_options)
