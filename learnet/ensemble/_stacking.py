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
Stacking ensembles.
"""
import logging
import typing

from sklearn import linear_model, neighbors

import learnet
from learnet import composite, flow, setup

LOGGER = logging.getLogger(__name__)


class Stacking(typing.NamedTuple):
    """Nodes of the stacking network."""

    folds: 'flow.Node'
    """Fold partition of the training rows."""
    oos: tuple['flow.Node']
    """Out-of-sample predictions of each of the base models."""
    judge: 'flow.Machine'
    """The adjudicator machine."""
    full: tuple['flow.Node']
    """Predictions of each of the base models fitted on all the training data."""
    prediction: 'flow.Node'
    """The final stack prediction."""


def stack(
    features: 'flow.Node',
    target: 'flow.Node',
    *bases: typing.Any,
    judge: typing.Any,
    nfolds: typing.Optional[int] = None,
) -> Stacking:
    """Build the two-layer stacking network.

    For each of the base models there is one machine per each fold trained on the fold complement. Their predictions
    on the fold itself are concatenated (in fold order) into a full-length out-of-sample prediction vector. The
    adjudicator gets trained on a table of these vectors (one column per base model in their declaration order).

    For the prediction path each base model gets one more machine fitted on all the training data whose predictions
    are assembled into a table of the very same column layout and passed to the adjudicator.

    Args:
        features: Node providing the features.
        target: Node providing the target.
        *bases: Base model configurations.
        judge: Adjudicator model configuration.
        nfolds: Number of folds (defaults to the ``[FOLDING]`` config).

    Returns:
        Tuple of the network nodes with the ``prediction`` node being its tail.
    """
    if not bases:
        raise learnet.InvalidError('Base models required')
    if nfolds is None:
        nfolds = setup.CONFIG[setup.SECTION_FOLDING][setup.OPT_NFOLDS]
    if nfolds < 2:
        raise learnet.InvalidPartitionError(f'At least 2 folds required ({nfolds} requested)')
    LOGGER.debug('Stacking %d base models using %d folds', len(bases), nfolds)
    names = tuple(f'x{i}' for i in range(1, len(bases) + 1))
    partition = flow.folds(features, nfolds)
    trainsets = [
        (flow.corestrict(features, partition, i), flow.corestrict(target, partition, i)) for i in range(nfolds)
    ]
    testsets = [flow.restrict(features, partition, i) for i in range(nfolds)]
    oos = tuple(
        flow.vcat(*(flow.predict(flow.machine(b, *t), s) for t, s in zip(trainsets, testsets))) for b in bases
    )
    adjudicator = flow.machine(judge, flow.table(*oos, names=names), target)
    full = tuple(flow.predict(flow.machine(b, features, target), features) for b in bases)
    return Stacking(partition, oos, adjudicator, full, flow.predict(adjudicator, flow.table(*full, names=names)))


def two_model_stack(
    features: 'flow.Source',
    target: 'flow.Source',
    *,
    regressor1: typing.Any,
    regressor2: typing.Any,
    judge: typing.Any,
    nfolds: typing.Optional[int],
) -> 'flow.Node':
    """Two-model stack with the adjudicator trained on the out-of-sample base model predictions.

    Args:
        regressor1: First base model.
        regressor2: Second base model.
        judge: Adjudicating model.
        nfolds: Number of folds for producing the out-of-sample predictions (defaults to the ``[FOLDING]`` config).
    """
    return stack(features, target, regressor1, regressor2, judge=judge, nfolds=nfolds).prediction


TwoModelStack = composite.export(
    'TwoModelStack',
    two_model_stack,
    regressor1=linear_model.LinearRegression(),
    regressor2=neighbors.KNeighborsRegressor(n_neighbors=4),
    judge=linear_model.LinearRegression(),
    nfolds=None,
)
