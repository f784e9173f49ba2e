"""Tests for assembling simulated trials into a SimulationResult."""

import numpy as np
import pandas as pd
import pytest

from mcdiffusion.basic_simulators.results import SimulationResult, assemble_results


@pytest.fixture
def outcome_matrices():
    # 3 trials x 2 coherence levels; entries encode (trial, level)
    choices = np.array([[1.0, 0.0], [0.0, np.nan], [1.0, 1.0]])
    rts = np.array([[0.51, 0.52], [0.61, np.nan], [0.71, 0.72]])
    return np.array([-0.2, 0.4]), choices, rts


class TestAssembleResults:
    def test_coherence_major_order(self, outcome_matrices):
        coherence, choices, rts = outcome_matrices
        result = assemble_results(coherence, choices, rts)

        assert len(result) == 6
        assert np.array_equal(result.coherence, [-0.2, -0.2, -0.2, 0.4, 0.4, 0.4])
        np.testing.assert_array_equal(result.choices, [1.0, 0.0, 1.0, 0.0, np.nan, 1.0])
        np.testing.assert_array_equal(result.rts, [0.51, 0.61, 0.71, 0.52, np.nan, 0.72])

    def test_undecided_mask(self, outcome_matrices):
        result = assemble_results(*outcome_matrices)
        assert result.undecided.tolist() == [False, False, False, False, True, False]

    def test_metadata_is_kept(self, outcome_matrices):
        result = assemble_results(
            *outcome_matrices, metadata={"random_state": 7}, sim_options={"trials": 3}
        )
        assert result.metadata["random_state"] == 7
        assert result.sim_options["trials"] == 3


class TestSimulationResult:
    def test_data_is_read_only(self, outcome_matrices):
        result = assemble_results(*outcome_matrices)
        with pytest.raises(ValueError):
            result.data[0, 1] = 0.0

    def test_to_dataframe(self, outcome_matrices):
        df = assemble_results(*outcome_matrices).to_dataframe()
        assert isinstance(df, pd.DataFrame)
        assert list(df.columns) == ["coherence", "choice", "rt"]
        assert df.shape == (6, 3)
        assert df["choice"].isna().sum() == 1

    def test_iterates_rows(self, outcome_matrices):
        rows = list(assemble_results(*outcome_matrices))
        assert rows[0] == (-0.2, 1.0, 0.51)
        assert len(rows) == 6

    def test_bad_shape_raises(self):
        with pytest.raises(ValueError, match="shape"):
            SimulationResult(np.zeros((4, 2)))

    def test_repr_counts_undecided(self, outcome_matrices):
        assert "1 undecided" in repr(assemble_results(*outcome_matrices))
