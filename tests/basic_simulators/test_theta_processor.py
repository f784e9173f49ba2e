"""Tests for decoding the theta parameter vector."""

import numpy as np
import pytest

from mcdiffusion.basic_simulators.theta_processor import DecodedTheta, decode_theta
from mcdiffusion.config import THETA_PARAMS
from mcdiffusion.exceptions import ConfigurationError

THETA = [12.0, 0.01, -0.2, 1.1, 0.4, 0.35, 0.06, 0.38, 0.07]


class TestDecodeTheta:
    def test_positional_mapping(self):
        theta = decode_theta(THETA)
        assert theta.kappa == 12.0
        assert theta.coh_bias == 0.01
        assert theta.u_bias == -0.2
        assert theta.sigma == 1.1
        assert theta.b_sigma == 0.4
        assert theta.tnd_up == 0.35
        assert theta.tnd_up_sd == 0.06
        assert theta.tnd_lower == 0.38
        assert theta.tnd_lower_sd == 0.07

    def test_numpy_input(self):
        assert decode_theta(np.array(THETA)) == decode_theta(THETA)

    def test_mapping_input(self):
        theta = decode_theta(dict(zip(THETA_PARAMS, THETA)))
        assert theta == decode_theta(THETA)

    def test_short_vector_raises(self):
        with pytest.raises(ConfigurationError, match="9 entries"):
            decode_theta(THETA[:8])

    def test_long_vector_raises(self):
        with pytest.raises(ConfigurationError, match="9 entries"):
            decode_theta(THETA + [0.0])

    def test_mapping_missing_key_raises(self):
        params = dict(zip(THETA_PARAMS, THETA))
        del params["b_sigma"]
        with pytest.raises(ConfigurationError, match="b_sigma"):
            decode_theta(params)

    def test_to_array_and_dict(self):
        theta = decode_theta(THETA)
        assert np.array_equal(theta.to_array(), np.array(THETA))
        assert list(theta.to_dict()) == THETA_PARAMS

    def test_frozen(self):
        theta = decode_theta(THETA)
        with pytest.raises(AttributeError):
            theta.kappa = 1.0
        assert isinstance(theta, DecodedTheta)
