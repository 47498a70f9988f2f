"""
Tests for MLEDesign and MLESolution.
"""

import numpy as np
import pytest

from pylikelihood.core.exceptions import DimensionError, ValidationError
from pylikelihood.mle import MLEDesign, MLESolution, mle_yule


class TestDesign:

    def test_from_list(self):
        design = MLEDesign.from_array([[0, 1], [1, 2], [0, 3]])
        assert design.n == 3
        assert design.p == 2
        assert design.data.dtype == np.float64

    def test_copies_and_freezes_data(self):
        raw = np.array([[0.0, 1.0], [1.0, 2.0]])
        design = MLEDesign.from_array(raw)
        raw[0, 0] = 9.0
        assert design.data[0, 0] == 0.0
        with pytest.raises(ValueError):
            design.data[0, 0] = 5.0

    def test_row(self):
        design = MLEDesign.from_array([[0, 1], [1, 2]])
        assert design.row(1).shape == (1, 2)
        np.testing.assert_array_equal(design.row(1), [[1.0, 2.0]])

    def test_rejects_1d(self):
        with pytest.raises(DimensionError):
            MLEDesign.from_array([1.0, 2.0, 3.0])

    def test_rejects_empty(self):
        with pytest.raises(ValidationError, match="at least 1 observation"):
            MLEDesign.from_array(np.empty((0, 2)))

    def test_rejects_nan(self):
        with pytest.raises(ValidationError, match="1 NaN"):
            MLEDesign.from_array([[0.0, np.nan]])

    def test_rejects_strings(self):
        with pytest.raises(ValidationError):
            MLEDesign.from_array([["a", "b"]])

    def test_repr(self):
        assert repr(MLEDesign.from_array(np.zeros((4, 3)))) == "MLEDesign(n=4, p=3)"


class TestSolution:

    @pytest.fixture
    def solution(self, link_counts):
        return mle_yule(link_counts, starting_point=[3.0])

    def test_type(self, solution):
        assert isinstance(solution, MLESolution)
        assert solution.model_name == 'yule'

    def test_sign_convention(self, solution):
        assert solution.loglik == -solution.neg_loglik
        assert solution.loglik < 0

    def test_as_tuple(self, solution):
        params, neg_loglik = solution.as_tuple()
        np.testing.assert_array_equal(params, solution.parameters)
        assert neg_loglik == solution.neg_loglik

    def test_information_criteria(self, solution):
        assert solution.aic == pytest.approx(2 * solution.neg_loglik + 2)
        assert solution.bic == pytest.approx(2 * solution.neg_loglik + np.log(2))

    def test_timing_sections(self, solution):
        for key in ('total_seconds', 'setup', 'optimization', 'final_evaluation'):
            assert key in solution.timing

    def test_summary(self, solution):
        text = solution.summary()
        assert "Maximum Likelihood Results: yule" in text
        assert "Status: converged" in text
        assert "beta[0]" in text

    def test_to_dict(self, solution):
        d = solution.to_dict()
        assert d['model'] == 'yule'
        assert d['converged'] is True
        assert d['loglik'] == solution.loglik
        assert d['parameters'] == solution.parameters.tolist()

    def test_repr(self, solution):
        assert repr(solution).startswith("MLESolution(model='yule', n=2")
