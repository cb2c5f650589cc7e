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
Global Learnet unit tests fixtures.
"""
import numpy
import pandas
import pytest


@pytest.fixture(scope='session')
def steps_features() -> numpy.ndarray:
    """Single column features of the step function dataset."""
    return numpy.array([-4, -1, 2, -3, 0, 3, -2, 1, 4], dtype=float).reshape(-1, 1)


@pytest.fixture(scope='session')
def steps_target(steps_features: numpy.ndarray) -> numpy.ndarray:
    """Step function target."""
    values = steps_features.ravel()
    return numpy.select([values < -1.5, values < 1.5], [-1.0, 0.0], 1.0)


@pytest.fixture(scope='session')
def line_target(steps_features: numpy.ndarray) -> numpy.ndarray:
    """Exactly linear target."""
    return 2 * steps_features.ravel() + 1


@pytest.fixture(scope='session')
def features() -> pandas.DataFrame:
    """Random features dataset."""
    return pandas.DataFrame(numpy.random.RandomState(42).normal(size=(40, 5)), columns=list('abcde'))


@pytest.fixture(scope='session')
def target(features: pandas.DataFrame) -> pandas.Series:
    """Noisy linear target."""
    noise = numpy.random.RandomState(0).normal(scale=0.1, size=len(features))
    return pandas.Series(features.to_numpy() @ [1.0, -2.0, 0.5, 0.0, 3.0] + noise, name='y')
