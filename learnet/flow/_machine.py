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
Training units of the learning network.
"""
import logging
import typing

import cloudpickle
from sklearn import base

import learnet
from learnet import payload

from . import _exception, _node

if typing.TYPE_CHECKING:
    from learnet import flow

LOGGER = logging.getLogger(__name__)


class Machine:
    """Training unit binding a model configuration to the nodes providing its training data.

    The machine holds just a reference to the model (its hyper-parameters). Fitting creates a fresh clone of the
    model trained on the values of the argument nodes - the fitted estimator is never mutated afterwards and any
    subsequent fit replaces it with a new one.

    Args:
        model: Model (hyper-parameter) configuration implementing the ``fit`` and ``predict`` (or ``transform``)
               contract.
        features: Node providing the training features.
        target: Optional node providing the training target.
    """

    def __init__(self, model: typing.Any, features: 'flow.Node', target: typing.Optional['flow.Node'] = None):
        if not hasattr(model, 'fit'):
            raise learnet.InvalidError(f'Not a model: {model}')
        self.model: typing.Any = model
        self.args: tuple['flow.Node'] = (features,) if target is None else (features, target)
        for arg in self.args:
            if not isinstance(arg, _node.Node):
                raise _exception.TopologyError(f'Not a node: {arg}')
        self._estimator: typing.Optional[typing.Any] = None

    def __repr__(self):
        return f'Machine[{self.model.__class__.__name__}]'

    @property
    def fitted(self) -> bool:
        """Check whether this machine has been fitted.

        Returns:
            True if fitted.
        """
        return self._estimator is not None

    @property
    def estimator(self) -> typing.Any:
        """The fitted estimator.

        Returns:
            Estimator instance fitted by this machine.
        """
        if self._estimator is None:
            raise learnet.UnfittedModelError(f'{self} not fitted')
        return self._estimator

    @staticmethod
    def train(model: typing.Any, features: typing.Any, target: typing.Any = None) -> typing.Any:
        """Fit a fresh clone of the given model.

        Args:
            model: Model configuration.
            features: Training features.
            target: Training target.

        Returns:
            Fitted clone of the model.
        """
        estimator = base.clone(model)
        if target is None:
            return estimator.fit(features)
        payload.check_aligned(features, target)
        return estimator.fit(features, target)

    def fit(self, *args: typing.Any) -> 'flow.Machine':
        """Fit the machine using the given values of its argument nodes.

        Args:
            *args: Training features (and target).

        Returns:
            Self.
        """
        LOGGER.debug('Fitting %s on %d rows', self, payload.nrows(args[0]))
        return self.assign(self.train(self.model, *args))

    def assign(self, estimator: typing.Any) -> 'flow.Machine':
        """Set the fitted estimator (trained elsewhere).

        Args:
            estimator: Fitted estimator.

        Returns:
            Self.
        """
        self._estimator = estimator
        return self

    def predict(self, features: typing.Any) -> typing.Any:
        """Predict using the fitted estimator.

        Args:
            features: Features to predict for.

        Returns:
            Predictions.
        """
        return self.estimator.predict(features)

    def transform(self, features: typing.Any) -> typing.Any:
        """Transform using the fitted estimator.

        Args:
            features: Features to be transformed.

        Returns:
            Transformed features.
        """
        return self.estimator.transform(features)

    def get_state(self) -> bytes:
        """Return the fitted state of the machine.

        Returns:
            The pickled fitted estimator or empty bytes if not fitted.
        """
        if not self.fitted:
            return b''
        LOGGER.debug('Getting %s state', self)
        return cloudpickle.dumps(self._estimator)

    def set_state(self, state: bytes) -> None:
        """Restore the fitted state of the machine.

        Args:
            state: Bytes previously produced by ``get_state``.
        """
        if not state:
            return
        LOGGER.debug('Setting %s state (%d bytes)', self, len(state))
        estimator = cloudpickle.loads(state)
        if estimator.__class__ is not self.model.__class__:
            raise learnet.UnexpectedError(f'State of {estimator.__class__.__name__} incompatible with {self}')
        self.assign(estimator)


def machine(model: typing.Any, features: 'flow.Node', target: typing.Optional['flow.Node'] = None) -> 'flow.Machine':
    """Create a machine.

    Args:
        model: Model configuration.
        features: Node providing the training features.
        target: Optional node providing the training target.

    Returns:
        Machine instance.
    """
    return Machine(model, features, target)
