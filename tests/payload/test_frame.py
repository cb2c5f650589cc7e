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
Payload frame operations unit tests.
"""
# pylint: disable=no-self-use
import numpy
import pandas
import pytest

import learnet
from learnet import payload


class TestNrows:
    """Row counting unit tests."""

    def test_kinds(self, features: pandas.DataFrame, target: pandas.Series):
        """Test the supported payload kinds."""
        assert payload.nrows(features) == 40
        assert payload.nrows(target) == 40
        assert payload.nrows(numpy.zeros((7, 3))) == 7
        assert payload.nrows([1, 2, 3]) == 3

    @pytest.mark.parametrize('data', [5, numpy.float64(1.0), None])
    def test_scalar(self, data):
        """Test payloads without rows."""
        with pytest.raises(learnet.InvalidError):
            payload.nrows(data)

    def test_aligned(self, features: pandas.DataFrame, target: pandas.Series):
        """Test the alignment checking."""
        payload.check_aligned(features, target)
        with pytest.raises(learnet.ShapeMismatchError):
            payload.check_aligned(features, target[:-1])


class TestVcat:
    """Row concatenation unit tests."""

    def test_pandas(self, target: pandas.Series):
        """Test concatenating pandas series."""
        result = payload.vcat(target[:10], target[10:])
        assert isinstance(result, pandas.Series)
        pandas.testing.assert_series_equal(result, target)

    def test_numpy(self):
        """Test concatenating arrays (and mixtures with sequences)."""
        numpy.testing.assert_array_equal(payload.vcat(numpy.arange(3), [3, 4]), numpy.arange(5))

    def test_sequence(self):
        """Test concatenating plain sequences."""
        assert payload.vcat(['a'], ['b', 'c'], []) == ['a', 'b', 'c']

    def test_empty(self):
        """Test concatenating nothing."""
        with pytest.raises(learnet.InvalidError):
            payload.vcat()


class TestTable:
    """Column assembly unit tests."""

    def test_default(self):
        """Test the default column naming and ordering."""
        result = payload.table(numpy.array([1.0, 2.0]), [3.0, 4.0], numpy.array([[5.0], [6.0]]))
        assert list(result.columns) == ['x1', 'x2', 'x3']
        numpy.testing.assert_array_equal(result.to_numpy(), [[1.0, 3.0, 5.0], [2.0, 4.0, 6.0]])

    def test_names(self):
        """Test explicit column names."""
        result = payload.table([1, 2], [3, 4], names=['b', 'a'])
        assert list(result.columns) == ['b', 'a']
        assert list(result['a']) == [3, 4]

    def test_mismatch(self):
        """Test the shape errors."""
        with pytest.raises(learnet.ShapeMismatchError):
            payload.table([1, 2], [3, 4, 5])
        with pytest.raises(learnet.ShapeMismatchError):
            payload.table([1, 2], [3, 4], names=['a'])
        with pytest.raises(learnet.ShapeMismatchError):
            payload.table(numpy.zeros((2, 2)))
        with pytest.raises(learnet.InvalidError):
            payload.table()


class TestAggregate:
    """Element-wise reduction unit tests."""

    def test_reduce(self):
        """Test the reduction."""
        numpy.testing.assert_array_equal(payload.aggregate(numpy.mean, [1.0, 2.0], [3.0, 6.0]), [2.0, 4.0])
        numpy.testing.assert_array_equal(payload.aggregate(numpy.sum, [1.0, 2.0], [3.0, 6.0]), [4.0, 8.0])

    def test_single(self):
        """Test the reduction of a single part is the part itself."""
        part = numpy.array([0.1, 0.7, 1.3])
        numpy.testing.assert_array_equal(payload.aggregate(numpy.mean, part), part)

    def test_mismatch(self):
        """Test parts of different shapes."""
        with pytest.raises(learnet.ShapeMismatchError):
            payload.aggregate(numpy.mean, [1.0, 2.0], [1.0])
