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
Homogeneous ensembles.
"""
import logging
import typing

import numpy
from sklearn import base, tree, utils

import learnet
from learnet import composite, flow

LOGGER = logging.getLogger(__name__)

AGGREGATES: typing.Mapping[str, typing.Callable[..., 'flow.Node']] = {
    'mean': flow.mean,
    'sum': flow.sum,
}


def seeds(atom: typing.Any, size: int, random_state: typing.Any) -> typing.Sequence[typing.Optional[int]]:
    """Draw independent seeds for the ensemble members.

    Args:
        atom: Member model configuration.
        size: Number of members.
        random_state: Seed (or numpy random state) to draw the member seeds from.

    Returns:
        Sequence of seeds (``None`` when the members should be left unseeded).
    """
    if random_state is None or 'random_state' not in atom.get_params(deep=False):
        return [None] * size
    return utils.check_random_state(random_state).randint(numpy.iinfo(numpy.int32).max, size=size).tolist()


def homogeneous(
    features: 'flow.Source',
    target: 'flow.Source',
    *,
    atom: typing.Any,
    size: int,
    aggregate: str,
    random_state: typing.Any,
) -> 'flow.Node':
    """Homogeneous ensemble of identically configured models trained independently on the same data and
    combined by aggregating their predictions.

    No bagging is involved so the members only differ if their training is randomized (e.g. decision trees with
    random feature subsampling). The default atom considers a random half of the features at each split.

    Args:
        atom: Member model configuration.
        size: Number of members.
        aggregate: Name of the prediction aggregation (``mean`` or ``sum``).
        random_state: Optional seed for independently seeding the members.
    """
    if size < 1:
        raise learnet.InvalidError(f'Invalid ensemble size: {size}')
    try:
        reducer = AGGREGATES[aggregate]
    except KeyError as err:
        raise learnet.InvalidError(f'Unknown aggregate {aggregate} (known: {", ".join(AGGREGATES)})') from err
    LOGGER.debug('Ensembling %d members of %s', size, atom.__class__.__name__)
    members = []
    for seed in seeds(atom, size, random_state):
        model = atom if seed is None else base.clone(atom).set_params(random_state=seed)
        members.append(flow.predict(flow.machine(model, features, target), features))
    return reducer(*members)


Homogeneous = composite.export(
    'Homogeneous',
    homogeneous,
    atom=tree.DecisionTreeRegressor(max_features=0.5),
    size=100,
    aggregate='mean',
    random_state=None,
)
