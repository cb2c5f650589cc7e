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
Evaluation methods unit tests.
"""
# pylint: disable=no-self-use
import numpy
import pandas
import pytest
from sklearn import linear_model, tree

import learnet
from learnet import ensemble, evaluation


class TestMeasure:
    """Measures unit tests."""

    def test_rms(self):
        """Test the root mean squared error."""
        assert evaluation.rms([0.0, 0.0], [3.0, 4.0]) == pytest.approx(numpy.sqrt(12.5))

    def test_mav(self):
        """Test the mean absolute error."""
        assert evaluation.mav([0.0, 0.0], [3.0, -4.0]) == pytest.approx(3.5)
        assert evaluation.MEASURES['mae'] is evaluation.mav


class TestEvaluate:
    """Cross-validated evaluation unit tests."""

    def test_exact(self, steps_features: numpy.ndarray, line_target: numpy.ndarray):
        """Test evaluating a model that fits the data exactly."""
        outcome = evaluation.evaluate(linear_model.LinearRegression(), steps_features, line_target, nfolds=3)
        assert outcome.measure == 'rms'
        assert len(outcome.per_fold) == 3
        assert outcome.mean == pytest.approx(0, abs=1e-9)

    def test_defaults(self, features: pandas.DataFrame, target: pandas.Series):
        """Test the config defaults."""
        outcome = evaluation.evaluate(linear_model.LinearRegression(), features, target)
        assert outcome.measure == 'rms'
        assert len(outcome.per_fold) == 6
        assert outcome.mean == pytest.approx(numpy.mean(outcome.per_fold))

    def test_composite(self, features: pandas.DataFrame, target: pandas.Series):
        """Test evaluating a composite model."""
        stack = evaluation.evaluate(ensemble.TwoModelStack(), features, target, measure='mav', nfolds=4)
        assert stack.measure == 'mav'
        assert all(v >= 0 for v in stack.per_fold)
        assert stack.mean < target.std()

    def test_invalid(self, features: pandas.DataFrame, target: pandas.Series):
        """Test the invalid evaluation setup."""
        with pytest.raises(learnet.InvalidError):
            evaluation.evaluate(linear_model.LinearRegression(), features, target, measure='foo')
        with pytest.raises(learnet.InvalidPartitionError):
            evaluation.evaluate(linear_model.LinearRegression(), features, target, nfolds=1)

    @pytest.mark.parametrize('nfolds', [0, -3])
    def test_explicit_folds(self, nfolds: int, features: pandas.DataFrame, target: pandas.Series):
        """Test explicit non-positive fold counts are rejected rather than replaced by the config default."""
        with pytest.raises(learnet.InvalidPartitionError):
            evaluation.evaluate(linear_model.LinearRegression(), features, target, nfolds=nfolds)
        with pytest.raises(learnet.InvalidPartitionError):
            evaluation.learning_curve(linear_model.Ridge(), features, target, 'alpha', [1.0], nfolds=nfolds)

    def test_explicit_measure(self, features: pandas.DataFrame, target: pandas.Series):
        """Test an empty measure name is rejected rather than replaced by the config default."""
        with pytest.raises(learnet.InvalidError):
            evaluation.evaluate(linear_model.LinearRegression(), features, target, measure='')


class TestGrid:
    """Parameter range unit tests."""

    def test_linear(self):
        """Test the linear scale."""
        assert evaluation.grid(2, 10, 5) == (2, 4, 6, 8, 10)
        assert evaluation.grid(0, 1, 3, integer=False) == (0.0, 0.5, 1.0)

    def test_log(self):
        """Test the log scale."""
        assert evaluation.grid(1, 100, 3, scale='log') == (1, 10, 100)

    def test_duplicates(self):
        """Test the integer rounding duplicates get removed."""
        assert evaluation.grid(1, 2, 5) == (1, 2)

    @pytest.mark.parametrize(
        'args, kwargs', [((1, 2, 0), {}), ((2, 1), {}), ((0, 10), {'scale': 'log'}), ((1, 10), {'scale': 'foo'})]
    )
    def test_invalid(self, args, kwargs):
        """Test the invalid ranges."""
        with pytest.raises(learnet.InvalidError):
            evaluation.grid(*args, **kwargs)


class TestLearningCurve:
    """Learning curve unit tests."""

    def test_curve(self, features: pandas.DataFrame, target: pandas.Series):
        """Test the learning curve of a simple parameter."""
        curve = evaluation.learning_curve(
            linear_model.Ridge(), features, target, 'alpha', [0.01, 1000.0], nfolds=4
        )
        assert curve.parameter_name == 'alpha'
        assert curve.parameter_values == (0.01, 1000.0)
        assert len(curve.measurements) == 2
        assert curve.measurements[0] < curve.measurements[1]

    def test_nested(self, features: pandas.DataFrame, target: pandas.Series):
        """Test the learning curve of a nested composite parameter."""
        model = ensemble.Homogeneous(atom=tree.DecisionTreeRegressor(max_features=2), size=3, random_state=0)
        curve = evaluation.learning_curve(model, features, target, 'atom__min_samples_split', (2, 10), nfolds=3)
        assert curve.parameter_values == (2, 10)
        assert all(m > 0 for m in curve.measurements)

    def test_invalid(self, features: pandas.DataFrame, target: pandas.Series):
        """Test the invalid curve setup."""
        with pytest.raises(learnet.InvalidError):
            evaluation.learning_curve(linear_model.Ridge(), features, target, 'foo', [1, 2])
        with pytest.raises(learnet.InvalidError):
            evaluation.learning_curve(linear_model.Ridge(), features, target, 'alpha', [])
