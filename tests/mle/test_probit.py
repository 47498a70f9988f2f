"""
Tests for the probit likelihood.

Validates:
    - Value on a hand-computed case
    - Analytic gradient against finite differences
    - Linear predictor reuse inside value_and_gradient
    - Numerical stability in the tails
    - Estimation (BFGS and simplex agree, truth recovered)
"""

import numpy as np
import pytest

from pylikelihood.core.exceptions import DimensionError, ValidationError
from pylikelihood.mle import mle_probit
from pylikelihood.mle.models import LinearPredictorCache, ProbitModel


SMALL = np.array([[0, 1.0], [1, 2.0], [0, 0.5]])


class TestValue:

    def test_zero_predictor(self):
        # every observation has probability 1/2
        model = ProbitModel()
        assert model.negative_log_likelihood(np.array([0.0]), SMALL) == pytest.approx(3 * np.log(2))

    def test_log_likelihood_is_negated(self):
        model = ProbitModel()
        beta = np.array([0.4])
        assert model.log_likelihood(beta, SMALL) == -model.negative_log_likelihood(beta, SMALL)

    def test_idempotent(self, probit_data):
        data, _ = probit_data
        model = ProbitModel()
        beta = np.array([0.1, 0.2])
        first = model.value_and_gradient(beta, data)
        second = model.value_and_gradient(beta, data)
        assert first[0] == second[0]
        np.testing.assert_array_equal(first[1], second[1])

    def test_does_not_modify_data(self, probit_data):
        data, _ = probit_data
        before = data.copy()
        ProbitModel().value_and_gradient(np.array([0.1, 0.2]), data)
        np.testing.assert_array_equal(data, before)

    def test_extreme_predictor_stays_finite(self):
        data = np.array([[0, 40.0], [1, -40.0]])
        f, g = ProbitModel().value_and_gradient(np.array([-1.0]), data)
        assert np.isfinite(f)
        assert np.all(np.isfinite(g))


class TestGradient:

    def test_matches_finite_differences(self, probit_data, numerical_gradient):
        data, _ = probit_data
        model = ProbitModel()
        beta = np.array([0.2, -0.3])
        expected = numerical_gradient(lambda b: model.negative_log_likelihood(b, data), beta)
        np.testing.assert_allclose(model.gradient(beta, data), expected, rtol=1e-5, atol=1e-6)

    def test_value_and_gradient_agree_with_separate_calls(self, probit_data):
        data, _ = probit_data
        model = ProbitModel()
        beta = np.array([0.2, -0.3])
        f, g = model.value_and_gradient(beta, data)
        assert f == pytest.approx(model.negative_log_likelihood(beta, data))
        np.testing.assert_allclose(g, model.gradient(beta, data))


class TestPredictorCache:

    def test_value_stores_but_does_not_mark_current(self):
        cache = LinearPredictorCache()
        ProbitModel().negative_log_likelihood(np.array([2.0]), SMALL, cache)
        np.testing.assert_allclose(cache.values, [2.0, 4.0, 1.0])
        assert not cache.is_current

    def test_stale_cache_is_ignored(self):
        model = ProbitModel()
        beta = np.array([0.3])
        cache = LinearPredictorCache()
        cache.store(np.array([100.0, 100.0, 100.0]))
        np.testing.assert_allclose(model.gradient(beta, SMALL, cache), model.gradient(beta, SMALL))

    def test_current_cache_is_reused(self):
        model = ProbitModel()
        cache = LinearPredictorCache()
        model.negative_log_likelihood(np.array([0.0]), SMALL, cache)
        cache.mark_current()
        # the cached predictor (beta = 0) is used, not the beta passed here
        np.testing.assert_allclose(
            model.gradient(np.array([5.0]), SMALL, cache),
            model.gradient(np.array([0.0]), SMALL),
        )

    def test_gradient_releases_cache(self):
        model = ProbitModel()
        cache = LinearPredictorCache()
        model.negative_log_likelihood(np.array([0.0]), SMALL, cache)
        cache.mark_current()
        model.gradient(np.array([0.0]), SMALL, cache)
        assert cache.values is None
        assert not cache.is_current

    def test_empty_cache_cannot_be_marked_current(self):
        with pytest.raises(RuntimeError, match="empty"):
            LinearPredictorCache().mark_current()


class TestValidation:

    def test_parameter_count(self):
        assert ProbitModel().n_params(np.zeros((3, 4))) == 3

    def test_needs_a_covariate(self):
        with pytest.raises(DimensionError):
            ProbitModel().validate(np.zeros((3, 1)))

    def test_outcome_must_be_binary(self):
        with pytest.raises(ValidationError, match="binary"):
            ProbitModel().validate(np.array([[0, 1.0], [2, 1.0]]))


class TestEstimation:

    def test_bfgs_converges(self, probit_data):
        data, _ = probit_data
        sol = mle_probit(data)
        assert sol.converged
        assert sol.status == 'converged'
        assert sol.convergence_metric < 1e-4

    def test_recovers_truth(self, probit_data):
        data, beta_true = probit_data
        sol = mle_probit(data)
        np.testing.assert_allclose(sol.parameters, beta_true, atol=0.3)

    def test_repeated_calls_identical(self, probit_data):
        data, _ = probit_data
        first = mle_probit(data, starting_point=[0.1, 0.1], step_size=0.01)
        second = mle_probit(data, starting_point=[0.1, 0.1], step_size=0.01)
        np.testing.assert_array_equal(first.parameters, second.parameters)
        assert first.neg_loglik == second.neg_loglik

    def test_simplex_agrees_with_bfgs(self, probit_data):
        data, _ = probit_data
        bfgs = mle_probit(data)
        simplex = mle_probit(data, method='simplex')
        assert simplex.converged
        np.testing.assert_allclose(simplex.parameters, bfgs.parameters, atol=2e-2)
        assert simplex.neg_loglik == pytest.approx(bfgs.neg_loglik, abs=1e-2)
