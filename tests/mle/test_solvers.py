"""
Tests for the public estimation entry points.

Validates:
    - Input validation at the boundary (starting point, settings, model)
    - Non-convergence reporting: warning by default, error when strict
    - Settings overrides reach the backend
    - Verbose output
    - likelihood_vector
"""

import numpy as np
import pytest

from pylikelihood.core.exceptions import ConvergenceError, DimensionError, ValidationError
from pylikelihood.mle import (
    MLEDesign,
    likelihood_vector,
    maximum_likelihood,
    mle_probit,
    mle_yule,
)
from pylikelihood.mle.models import ProbitModel, YuleModel


LINKS = np.array([
    [0.0, 120.0, 40.0, 18.0, 9.0, 5.0, 3.0, 2.0],
    [0.0, 100.0, 35.0, 15.0, 8.0, 4.0, 3.0, 1.0],
])


class TestDispatch:

    def test_model_by_name(self, probit_data):
        data, _ = probit_data
        by_name = maximum_likelihood(data, 'probit')
        by_instance = maximum_likelihood(data, ProbitModel())
        np.testing.assert_array_equal(by_name.parameters, by_instance.parameters)

    def test_accepts_design(self, probit_data):
        data, _ = probit_data
        sol = maximum_likelihood(MLEDesign.from_array(data), 'probit')
        assert sol.converged

    def test_backend_names(self, link_counts):
        assert mle_yule(link_counts, starting_point=[3.0]).backend_name == 'cpu_bfgs'
        sol = mle_yule(link_counts, starting_point=[3.0], method='simplex')
        assert sol.backend_name == 'cpu_simplex'

    def test_unknown_model(self):
        with pytest.raises(ValueError, match="Unknown model"):
            maximum_likelihood(LINKS, 'gamma')

    def test_model_wrong_type(self):
        with pytest.raises(TypeError):
            maximum_likelihood(LINKS, 42)

    def test_unknown_method(self):
        with pytest.raises(ValueError, match="Unknown method"):
            mle_yule(LINKS, starting_point=[3.0], method='newton')

    def test_bfgs_needs_gradient(self, regression_data):
        with pytest.raises(ValidationError, match="no analytic gradient"):
            maximum_likelihood(regression_data, 'ols', method='bfgs')


class TestInputValidation:

    def test_starting_point_wrong_length(self):
        with pytest.raises(DimensionError, match="starting_point"):
            mle_yule(LINKS, starting_point=[3.0, 1.0])

    def test_starting_point_not_finite(self):
        with pytest.raises(ValidationError, match="starting_point"):
            mle_yule(LINKS, starting_point=[np.nan])

    def test_scalar_starting_point(self):
        sol = mle_yule(LINKS, starting_point=3.0)
        assert sol.converged

    @pytest.mark.parametrize("step_size", [0.0, -1.0, np.inf])
    def test_bad_step_size(self, step_size):
        with pytest.raises(ValidationError, match="step_size"):
            mle_yule(LINKS, starting_point=[3.0], step_size=step_size)

    def test_bad_max_iter(self):
        with pytest.raises(ValidationError, match="max_iter"):
            mle_yule(LINKS, starting_point=[3.0], max_iter=0)

    def test_bad_tol(self):
        with pytest.raises(ValidationError, match="tol"):
            mle_yule(LINKS, starting_point=[3.0], tol=-1.0)

    def test_data_not_finite(self):
        data = LINKS.copy()
        data[0, 2] = np.inf
        with pytest.raises(ValidationError, match="non-finite"):
            mle_yule(data, starting_point=[3.0])

    def test_model_validation_runs(self):
        data = LINKS.copy()
        data[0, 2] = -4.0
        with pytest.raises(ValidationError, match="negative"):
            mle_yule(data, starting_point=[3.0])


class TestNonConvergence:

    def test_budget_exhausted_warns(self, probit_data):
        data, _ = probit_data
        with pytest.warns(RuntimeWarning, match="did not converge"):
            sol = mle_probit(data, max_iter=1)
        assert not sol.converged
        assert sol.status == 'max_iterations'
        assert sol.n_iter == 1
        assert len(sol.warnings) == 1
        assert np.all(np.isfinite(sol.parameters))
        assert sol.info['failure_reason'] is None

    def test_step_failure_reason_reported(self):
        with pytest.warns(RuntimeWarning, match=r"\[non_finite\]"):
            sol = mle_yule(LINKS)
        assert sol.status == 'step_failed'
        assert sol.info['failure_reason'] == 'non_finite'
        assert "non_finite" in sol.warnings[0]

    def test_strict_raises(self, probit_data):
        data, _ = probit_data
        with pytest.raises(ConvergenceError) as exc_info:
            mle_probit(data, max_iter=1, strict=True)
        assert exc_info.value.iterations == 1
        assert exc_info.value.reason == 'max_iterations'
        assert exc_info.value.threshold == 1e-4

    def test_strict_step_failure(self):
        with pytest.raises(ConvergenceError) as exc_info:
            mle_yule(LINKS, strict=True)
        assert exc_info.value.reason == 'step_failed'

    def test_converged_run_has_no_warnings(self, link_counts):
        sol = mle_yule(link_counts, starting_point=[3.0])
        assert sol.warnings == ()


class TestSettings:

    def test_defaults_recorded(self, link_counts):
        sol = mle_yule(link_counts, starting_point=[3.0])
        assert sol.info['tol'] == 1e-4
        assert sol.info['max_iter'] == 500
        assert sol.info['step_size'] == 0.001

    def test_simplex_defaults_recorded(self, link_counts):
        sol = mle_yule(link_counts, starting_point=[3.0], method='simplex')
        assert sol.info['tol'] == 1e-3
        assert sol.info['step_size'] == 1.0

    def test_overrides(self, link_counts):
        sol = mle_yule(link_counts, starting_point=[3.0], step_size=0.1, tol=1e-2, max_iter=50)
        assert sol.info['tol'] == 1e-2
        assert sol.info['max_iter'] == 50
        assert sol.info['step_size'] == 0.1
        assert sol.convergence_metric < 1e-2

    def test_evaluation_counts(self, link_counts):
        sol = mle_yule(link_counts, starting_point=[3.0])
        assert sol.info['n_function_evals'] > 0
        assert sol.info['n_gradient_evals'] > 0

    def test_simplex_uses_no_gradient(self, link_counts):
        sol = mle_yule(link_counts, starting_point=[3.0], method='simplex')
        assert sol.info['n_gradient_evals'] == 0


class TestVerbose:

    def test_progress_printed(self, link_counts, capsys):
        mle_yule(link_counts, starting_point=[3.0], verbose=True)
        out = capsys.readouterr().out
        assert "MLE (yule)" in out
        assert "Backend: cpu_bfgs" in out
        assert "gradient_norm=" in out
        assert "Minimum found at:" in out
        assert "Converged: True" in out

    def test_quiet_by_default(self, link_counts, capsys):
        mle_yule(link_counts, starting_point=[3.0])
        assert capsys.readouterr().out == ""


class TestLikelihoodVector:

    def test_sums_to_total(self, probit_data):
        data, _ = probit_data
        beta = np.array([0.1, -0.4])
        per_row = likelihood_vector(data, beta, 'probit')
        assert per_row.shape == (len(data),)
        assert per_row.sum() == pytest.approx(ProbitModel().negative_log_likelihood(beta, data))

    def test_link_counts(self):
        per_row = likelihood_vector(LINKS, [3.0], YuleModel())
        assert per_row.sum() == pytest.approx(YuleModel().negative_log_likelihood(np.array([3.0]), LINKS))
        assert per_row[0] > per_row[1]  # first row has more observations

    def test_outside_domain(self):
        per_row = likelihood_vector(LINKS, [1.5], 'yule')
        assert np.all(per_row == np.inf)

    def test_wrong_length(self):
        with pytest.raises(DimensionError, match="parameters"):
            likelihood_vector(LINKS, [3.0, 1.0], 'yule')

    def test_not_supported_by_ols(self, regression_data):
        with pytest.raises(ValidationError, match="row-wise"):
            likelihood_vector(regression_data, [0.0, 0.0, 0.0], 'ols')
