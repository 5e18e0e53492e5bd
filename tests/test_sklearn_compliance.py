"""Tests for sklearn check_estimator compliance of LarsRegressor."""

import numpy as np
import pytest
import scipy.sparse as sp
from sklearn.utils.estimator_checks import check_estimator

from larspath import LarsRegressor


# ── 1. Mixin ordering ───────────────────────────────────────────────

class TestMixinOrder:
    """RegressorMixin must appear before BaseEstimator in MRO."""

    def test_regressor_mixin_before_base_estimator(self):
        from sklearn.base import BaseEstimator, RegressorMixin
        mro = LarsRegressor.__mro__
        idx_reg = mro.index(RegressorMixin)
        idx_base = mro.index(BaseEstimator)
        assert idx_reg < idx_base, (
            f"RegressorMixin at {idx_reg} should come before "
            f"BaseEstimator at {idx_base} in MRO"
        )


# ── 2. Tags ─────────────────────────────────────────────────────────

class TestTags:
    """The tags must describe what fit() actually accepts."""

    def test_sparse_input_tag(self):
        assert LarsRegressor().__sklearn_tags__().input_tags.sparse

    def test_fits_sparse_input(self):
        rng = np.random.RandomState(0)
        X = sp.random(30, 5, density=0.4, format="csr", random_state=rng)
        y = rng.randn(30)
        model = LarsRegressor().fit(X, y)
        assert model.coef_.shape == (5,)


# ── 3. n_features_in_ consistency via validate_data ─────────────────

class TestNFeaturesConsistency:
    """predict() must raise when input has wrong number of features."""

    def test_predict_wrong_n_features_raises(self):
        rng = np.random.RandomState(0)
        X_train = rng.randn(50, 3)
        y_train = X_train @ [1, 2, 3] + rng.randn(50)
        model = LarsRegressor().fit(X_train, y_train)
        with pytest.raises(ValueError, match="feature"):
            model.predict(rng.randn(10, 5))


# ── 4. Full check_estimator pass ────────────────────────────────────

class TestSklearnCompliance:
    """The estimator should pass sklearn's full check_estimator suite."""

    def test_check_estimator_passes(self):
        # check_estimator raises on the first failure
        check_estimator(LarsRegressor())
