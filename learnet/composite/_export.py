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
Composite models defined by learning networks.
"""
import abc
import inspect
import logging
import typing

from sklearn import base

import learnet
from learnet import flow, payload

LOGGER = logging.getLogger(__name__)


class Composite(base.RegressorMixin, base.BaseEstimator, metaclass=abc.ABCMeta):
    """Abstract model implemented by a learning network.

    The constituent model configurations are the hyper-parameters of the composite (held by reference) while all
    the fitted state is owned by the network instance built from scratch upon each ``fit``. Composites follow the
    scikit-learn estimator contract so they can be nested in other composites or passed to any generic evaluation or
    tuning routines (including nested parameters like ``judge__alpha``).
    """

    @abc.abstractmethod
    def network(self, features: 'flow.Source', target: 'flow.Source') -> 'flow.Node':
        """Build the learning network of this composite.

        Args:
            features: Source node of the training features.
            target: Source node of the training target.

        Returns:
            Tail node producing the composite predictions.
        """

    def fit(self, X, y, runner: typing.Optional['flow.Runner'] = None) -> 'Composite':  # pylint: disable=invalid-name
        """Fit the composite by building and fitting a fresh instance of its network.

        Args:
            X: Training features.
            y: Training target.
            runner: Optional runner to execute the fitting (defaults to the configured one).

        Returns:
            Self.
        """
        self.__dict__.pop('network_', None)
        payload.check_aligned(X, y)
        features = flow.source(X)
        target = flow.source(y, kind=flow.Source.Kind.TARGET)
        network = flow.Network(self.network(features, target))
        if tuple(network.inputs) != (features,):
            raise flow.TopologyError(f'{self.__class__.__name__} network not driven by its features source')
        network.fit(runner)
        self.network_ = network  # pylint: disable=attribute-defined-outside-init
        LOGGER.info(
            'Fitted %s on %d rows (%d machines)', self.__class__.__name__, payload.nrows(X), len(network.machines)
        )
        return self

    def predict(self, X) -> typing.Any:  # pylint: disable=invalid-name
        """Predict using the fitted network.

        Args:
            X: Features to predict for.

        Returns:
            Predictions.
        """
        network: typing.Optional['flow.Network'] = getattr(self, 'network_', None)
        if network is None:
            raise learnet.UnfittedModelError(f'{self.__class__.__name__} not fitted')
        return network(X)


def export(
    name: str,
    builder: typing.Callable[..., 'flow.Node'],
    /,
    module: typing.Optional[str] = None,
    **defaults: typing.Any,
) -> type[Composite]:
    """Create a new composite model type from the given network builder.

    The keyword arguments declare the parameters of the new type (and their default values) - typically the
    constituent model configurations. The builder gets called with the features and target sources plus the current
    values of all these parameters.

    Args:
        name: Name of the new type.
        builder: Callable returning the tail node of the network given the ``features`` and ``target`` source nodes
                 and all the declared parameters as keyword arguments.
        module: Module the new type should pretend to be defined in (defaults to the builder module).
        **defaults: Parameters of the new type with their default values.

    Returns:
        New composite type.

    Examples:
        >>> def average(features, target, *, regressor1, regressor2):
        ...     predictions = (flow.predict(flow.machine(r, features, target), features) for r in (regressor1, regressor2))
        ...     return flow.mean(*predictions)
        >>> AverageTwo = composite.export('AverageTwo', average, regressor1=LinearRegression(), regressor2=Ridge())
    """
    if not name.isidentifier():
        raise learnet.InvalidError(f'Invalid type name: {name}')
    signature = inspect.Signature(
        [inspect.Parameter('self', inspect.Parameter.POSITIONAL_OR_KEYWORD)]
        + [inspect.Parameter(k, inspect.Parameter.KEYWORD_ONLY, default=v) for k, v in defaults.items()]
    )

    def __init__(self, **params):
        try:
            bound = signature.bind(self, **params)
        except TypeError as err:
            raise TypeError(f'{name}: {err}') from err
        bound.apply_defaults()
        for key, value in bound.arguments.items():
            if key != 'self':
                setattr(self, key, value)

    __init__.__signature__ = signature

    def network(self, features: 'flow.Source', target: 'flow.Source') -> 'flow.Node':
        return builder(features, target, **{k: getattr(self, k) for k in defaults})

    LOGGER.debug('Exporting composite %s with parameters %s', name, ', '.join(defaults))
    return type(
        name,
        (Composite,),
        {
            '__init__': __init__,
            '__module__': module or builder.__module__,
            '__qualname__': name,
            '__doc__': builder.__doc__,
            'network': network,
        },
    )
