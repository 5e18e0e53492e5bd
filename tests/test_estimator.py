"""Tests for the sklearn-compatible LarsRegressor."""

import numpy as np
import pytest
import scipy.sparse as sp
from sklearn.base import clone, is_regressor
from sklearn.linear_model import LassoLars, LinearRegression

from larspath import LarsRegressor
from larspath.datasets import make_correlated_regression
from larspath.linear._path import PathResult


@pytest.fixture
def data():
    d = make_correlated_regression(
        n_samples=100, n_features=10, n_informative=3, rho=0.0,
        noise=0.1, random_state=3,
    )
    return d.data, d.target + 4.0


class TestConstruction:

    def test_defaults(self):
        model = LarsRegressor()
        assert model.method == "lar"
        assert model.alpha == 0.0
        assert model.fit_intercept is True
        assert model.design is None
        assert model.max_steps is None

    def test_is_regressor(self):
        assert is_regressor(LarsRegressor())

    def test_mixin_order(self):
        mro = LarsRegressor.__mro__
        from sklearn.base import BaseEstimator, RegressorMixin
        assert mro.index(RegressorMixin) < mro.index(BaseEstimator)

    def test_clone(self):
        model = LarsRegressor(method="lasso", alpha=0.3, max_steps=5)
        cloned = clone(model)
        assert cloned.get_params() == model.get_params()


class TestFit:

    def test_fit_returns_self(self, data):
        X, y = data
        model = LarsRegressor()
        assert model.fit(X, y) is model

    def test_fitted_attributes(self, data):
        X, y = data
        model = LarsRegressor(method="lasso").fit(X, y)
        assert model.n_features_in_ == 10
        assert model.coef_.shape == (10,)
        assert model.coef_path_.shape == (10, model.alphas_.size)
        assert isinstance(model.path_result_, PathResult)
        assert model.n_iter_ == model.path_result_.n_iter
        assert model.active_ == model.path_result_.active
        assert isinstance(model.intercept_, float)

    def test_zero_alpha_is_least_squares(self, data):
        X, y = data
        model = LarsRegressor().fit(X, y)
        ols = LinearRegression().fit(X, y)
        np.testing.assert_allclose(model.coef_, ols.coef_, rtol=1e-7, atol=1e-9)
        assert model.intercept_ == pytest.approx(ols.intercept_, abs=1e-8)

    def test_large_alpha_is_intercept_only(self, data):
        X, y = data
        model = LarsRegressor(method="lasso", alpha=1e6).fit(X, y)
        np.testing.assert_array_equal(model.coef_, 0.0)
        assert model.intercept_ == pytest.approx(y.mean())

    def test_no_intercept(self, data):
        X, y = data
        model = LarsRegressor(fit_intercept=False).fit(X, y)
        assert model.intercept_ == 0.0
        ols = LinearRegression(fit_intercept=False).fit(X, y)
        np.testing.assert_allclose(model.coef_, ols.coef_, rtol=1e-7, atol=1e-9)

    @pytest.mark.parametrize("alpha", [0.5, 0.1, 0.01])
    def test_matches_sklearn_lasso_lars(self, data, alpha):
        X, y = data
        model = LarsRegressor(method="lasso", alpha=alpha).fit(X, y)
        ref = LassoLars(alpha=alpha).fit(X, y)
        np.testing.assert_allclose(model.coef_, ref.coef_, rtol=1e-6, atol=1e-8)
        assert model.intercept_ == pytest.approx(ref.intercept_, abs=1e-7)

    def test_sparse_matches_dense(self, data):
        X, y = data
        X = X.copy()
        X[np.abs(X) < 0.7] = 0.0
        dense = LarsRegressor(method="lasso", alpha=0.05).fit(X, y)
        sparse = LarsRegressor(method="lasso", alpha=0.05).fit(sp.csr_matrix(X), y)
        np.testing.assert_allclose(sparse.coef_, dense.coef_, rtol=1e-7, atol=1e-9)
        assert sparse.intercept_ == pytest.approx(dense.intercept_, abs=1e-8)
        np.testing.assert_allclose(
            sparse.predict(sp.csr_matrix(X)), dense.predict(X), rtol=1e-7, atol=1e-8
        )

    def test_sparse_input_ignores_dense_design(self, data):
        X, y = data
        ref = LarsRegressor(method="lasso", alpha=0.05).fit(sp.csr_matrix(X), y)
        model = LarsRegressor(method="lasso", alpha=0.05, design="gram")
        with pytest.warns(UserWarning, match="sparse"):
            model.fit(sp.csr_matrix(X), y)
        np.testing.assert_allclose(model.coef_, ref.coef_)

    def test_sparse_design_on_dense_input(self, data):
        X, y = data
        dense = LarsRegressor(method="lasso", alpha=0.05).fit(X, y)
        model = LarsRegressor(method="lasso", alpha=0.05, design="sparse").fit(X, y)
        np.testing.assert_allclose(model.coef_, dense.coef_, rtol=1e-7, atol=1e-9)

    def test_gram_design(self, data):
        X, y = data
        dense = LarsRegressor(method="lasso", alpha=0.05).fit(X, y)
        gram = LarsRegressor(method="lasso", alpha=0.05, design="gram").fit(X, y)
        np.testing.assert_allclose(gram.coef_, dense.coef_, rtol=1e-7, atol=1e-9)

    def test_float32(self, data):
        X, y = data
        model = LarsRegressor().fit(X.astype(np.float32), y.astype(np.float32))
        assert model.coef_.dtype == np.float32
        assert model.coef_path_.dtype == np.float32

    def test_negative_alpha_raises(self, data):
        X, y = data
        with pytest.raises(ValueError, match="alpha"):
            LarsRegressor(alpha=-1.0).fit(X, y)

    def test_unknown_method_raises(self, data):
        X, y = data
        with pytest.raises(ValueError, match="Unknown mode"):
            LarsRegressor(method="ridge").fit(X, y)


class TestPredict:

    def test_predict_shape(self, data):
        X, y = data
        model = LarsRegressor().fit(X, y)
        assert model.predict(X[:7]).shape == (7,)

    def test_score_close_to_one(self, data):
        X, y = data
        assert LarsRegressor().fit(X, y).score(X, y) > 0.95

    def test_wrong_feature_count_raises(self, data):
        X, y = data
        model = LarsRegressor().fit(X, y)
        with pytest.raises(ValueError):
            model.predict(X[:, :5])

    def test_unfitted_raises(self, data):
        from sklearn.exceptions import NotFittedError
        X, _ = data
        with pytest.raises(NotFittedError):
            LarsRegressor().predict(X)
