"""Tests for the design registry."""

import numpy as np
import pytest

from larspath.linear.designs import (
    BaseDesign,
    DenseDesign,
    GramDesign,
    SparseDesign,
    get_design,
    list_designs,
    register_design,
)


class _DummyDesign(DenseDesign):
    pass


class TestRegistry:

    @pytest.fixture
    def data(self):
        rng = np.random.RandomState(0)
        return rng.randn(10, 3), rng.randn(10)

    def test_builtins_registered(self):
        assert {"dense", "sparse", "gram"} <= set(list_designs())

    @pytest.mark.parametrize(
        "name, cls",
        [("dense", DenseDesign), ("sparse", SparseDesign), ("gram", GramDesign)],
    )
    def test_get_design_returns_instance(self, data, name, cls):
        X, y = data
        design = get_design(name, X, y)
        assert isinstance(design, cls)
        assert isinstance(design, BaseDesign)

    def test_kwargs_forwarded(self, data):
        X, y = data
        design = get_design("gram", X, y, dtype=np.float32)
        assert design.dtype == np.float32

    def test_get_unknown_raises(self, data):
        X, y = data
        with pytest.raises(KeyError, match="Unknown design"):
            get_design("nonexistent_design_xyz", X, y)

    def test_register_custom_design(self, data):
        X, y = data
        register_design("_test_dummy", _DummyDesign)
        assert "_test_dummy" in list_designs()
        assert isinstance(get_design("_test_dummy", X, y), _DummyDesign)

    def test_register_non_design_raises(self):
        with pytest.raises(TypeError, match="not a BaseDesign"):
            register_design("bad", str)

    def test_cannot_instantiate_abc_directly(self):
        with pytest.raises(TypeError):
            BaseDesign()
