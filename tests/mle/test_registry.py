"""
Tests for the model registry and capability declarations.
"""

import numpy as np
import pytest

from pylikelihood.core.capabilities import (
    ALL_CAPABILITIES,
    CAPABILITY_GRADIENT,
    CAPABILITY_ROWWISE,
)
from pylikelihood.core.protocols import Backend, DifferentiableObjective, Objective
from pylikelihood.mle.backends import CPUBFGSBackend, CPUSimplexBackend
from pylikelihood.mle.models import (
    MODELS,
    OLSModel,
    ProbitModel,
    WaringModel,
    YuleModel,
    ZipfModel,
    get_model,
)


class TestRegistry:

    @pytest.mark.parametrize("name,cls", [
        ('probit', ProbitModel),
        ('waring', WaringModel),
        ('yule', YuleModel),
        ('zipf', ZipfModel),
        ('ols', OLSModel),
    ])
    def test_lookup(self, name, cls):
        model = get_model(name)
        assert isinstance(model, cls)
        assert model.name == name

    def test_case_insensitive(self):
        assert isinstance(get_model('Probit'), ProbitModel)

    def test_instance_passthrough(self):
        model = YuleModel()
        assert get_model(model) is model

    def test_unknown(self):
        with pytest.raises(ValueError, match="Available"):
            get_model('poisson')

    def test_registry_complete(self):
        assert set(MODELS) == {'probit', 'waring', 'yule', 'zipf', 'ols'}


class TestCapabilities:

    @pytest.mark.parametrize("name", ['probit', 'waring', 'yule', 'zipf'])
    def test_gradient_and_rowwise(self, name):
        model = get_model(name)
        assert model.supports(CAPABILITY_GRADIENT)
        assert model.supports(CAPABILITY_ROWWISE)

    def test_ols_value_only(self):
        assert OLSModel().capabilities == frozenset()

    @pytest.mark.parametrize("name", sorted(MODELS))
    def test_declared_capabilities_are_known(self, name):
        assert get_model(name).capabilities <= ALL_CAPABILITIES


class TestBackends:

    @pytest.mark.parametrize("backend,name", [
        (CPUBFGSBackend(), 'cpu_bfgs'),
        (CPUSimplexBackend(), 'cpu_simplex'),
    ])
    def test_satisfy_protocol(self, backend, name):
        assert isinstance(backend, Backend)
        assert backend.name == name


class TestBoundLikelihood:

    def test_satisfies_protocols(self):
        bound = YuleModel().bind(np.array([[0.0, 5.0, 2.0]]))
        assert isinstance(bound, Objective)
        assert isinstance(bound, DifferentiableObjective)
        assert bound.n_params == 1

    def test_counts_evaluations(self):
        bound = YuleModel().bind(np.array([[0.0, 5.0, 2.0]]))
        bound.value(np.array([3.0]))
        bound.value_and_gradient(np.array([3.0]))
        bound.gradient(np.array([3.0]))
        assert bound.n_function_evals == 2
        assert bound.n_gradient_evals == 2

    def test_value_and_gradient_outside_domain(self):
        bound = WaringModel().bind(np.array([[0.0, 5.0, 2.0]]))
        f, g = bound.value_and_gradient(np.array([1.0, 0.0]))
        assert f == np.inf
        assert g.shape == (2,)
        assert np.all(np.isnan(g))
