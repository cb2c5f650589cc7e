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
Averaging ensembles.
"""
import typing

from sklearn import linear_model, neighbors

from learnet import composite, flow


def average_two(
    features: 'flow.Source', target: 'flow.Source', *, regressor1: typing.Any, regressor2: typing.Any
) -> 'flow.Node':
    """Naive average of the predictions of two regressors.

    Args:
        regressor1: First model.
        regressor2: Second model.
    """
    return flow.mean(*(flow.predict(flow.machine(r, features, target), features) for r in (regressor1, regressor2)))


AverageTwo = composite.export(
    'AverageTwo',
    average_two,
    regressor1=linear_model.LinearRegression(),
    regressor2=neighbors.KNeighborsRegressor(n_neighbors=4),
)
