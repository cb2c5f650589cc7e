# Licensed to the Apache Software Foundation (ASF) under one
# or more contributor license agreements.  See the NOTICE file
# distributed with this work for additional information
# regarding copyright ownership.  The ASF licenses this file
# to you under the Apache License, Version 2.0 (the
# "License"); you may not use this file except in compliance
# with the License.  You may obtain a copy of the License at
#
#   http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing,
# software distributed under the License is distributed on an
# "AS IS" BASIS, WITHOUT WARRANTIES OR CONDITIONS OF ANY
# KIND, either express or implied.  See the License for the
# specific language governing permissions and limitations
# under the License.

"""
Flow machine unit tests.
"""
# pylint: disable=no-self-use
import numpy
import pytest
from sklearn import linear_model, preprocessing, tree

import learnet
from learnet import flow


class TestMachine:
    """Machine unit tests."""

    @staticmethod
    @pytest.fixture(scope='function')
    def model() -> linear_model.LinearRegression:
        """Model fixture."""
        return linear_model.LinearRegression()

    @staticmethod
    @pytest.fixture(scope='function')
    def machine(
        model: linear_model.LinearRegression, steps_features: numpy.ndarray, line_target: numpy.ndarray
    ) -> flow.Machine:
        """Machine fixture."""
        return flow.machine(model, flow.source(steps_features), flow.source(line_target, kind='target'))

    def test_unfitted(self, machine: flow.Machine, steps_features: numpy.ndarray):
        """Test using an unfitted machine."""
        assert not machine.fitted
        with pytest.raises(learnet.UnfittedModelError):
            machine.predict(steps_features)
        with pytest.raises(learnet.UnfittedModelError):
            _ = machine.estimator
        assert machine.get_state() == b''

    def test_fit(
        self,
        machine: flow.Machine,
        model: linear_model.LinearRegression,
        steps_features: numpy.ndarray,
        line_target: numpy.ndarray,
    ):
        """Test the machine fitting keeps the model untouched."""
        machine.fit(steps_features, line_target)
        assert machine.fitted
        assert machine.estimator is not model
        assert not hasattr(model, 'coef_')
        numpy.testing.assert_allclose(machine.predict(steps_features), line_target)

    def test_refit(self, machine: flow.Machine, steps_features: numpy.ndarray, line_target: numpy.ndarray):
        """Test refitting replaces the estimator."""
        first = machine.fit(steps_features, line_target).estimator
        second = machine.fit(steps_features, -line_target).estimator
        assert first is not second
        numpy.testing.assert_allclose(first.predict(steps_features), line_target)
        numpy.testing.assert_allclose(second.predict(steps_features), -line_target)

    def test_misaligned(self, machine: flow.Machine, steps_features: numpy.ndarray, line_target: numpy.ndarray):
        """Test fitting on misaligned data."""
        with pytest.raises(learnet.ShapeMismatchError):
            machine.fit(steps_features, line_target[:-1])
        assert not machine.fitted

    def test_invalid(self, steps_features: numpy.ndarray):
        """Test the invalid machine arguments."""
        with pytest.raises(learnet.InvalidError):
            flow.machine(object(), flow.source(steps_features))
        with pytest.raises(flow.TopologyError):
            flow.machine(linear_model.LinearRegression(), steps_features)

    def test_state(
        self,
        machine: flow.Machine,
        model: linear_model.LinearRegression,
        steps_features: numpy.ndarray,
        line_target: numpy.ndarray,
    ):
        """Test the state snapshot roundtrip."""
        state = machine.fit(steps_features, line_target).get_state()
        restored = flow.machine(model, flow.source(steps_features))
        restored.set_state(state)
        numpy.testing.assert_array_equal(restored.predict(steps_features), machine.predict(steps_features))
        incompatible = flow.machine(tree.DecisionTreeRegressor(), flow.source(steps_features))
        with pytest.raises(learnet.UnexpectedError):
            incompatible.set_state(state)

    def test_transform(self, steps_features: numpy.ndarray):
        """Test the unsupervised machine."""
        features = flow.source(steps_features)
        scaled = flow.transform(flow.machine(preprocessing.StandardScaler(), features), features)
        scaled.fit()
        result = scaled()
        numpy.testing.assert_allclose(result.mean(), 0, atol=1e-12)
        numpy.testing.assert_allclose(result.std(), 1)
