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
Learning network nodes.

Nodes are immutable once created and can only refer to nodes created before them so the creation order is always a
valid topological order of any network.
"""
import abc
import enum
import itertools
import typing
import uuid

from . import _exception

if typing.TYPE_CHECKING:
    from learnet import flow

_ORDER = itertools.count()


class Node(metaclass=abc.ABCMeta):
    """Abstract learning network node.

    Args:
        *parents: Upstream nodes whose values are the inputs of this node.
    """

    def __init__(self, *parents: 'flow.Node'):
        for parent in parents:
            if not isinstance(parent, Node):
                raise _exception.TopologyError(f'Not a node: {parent}')
        self.parents: tuple['flow.Node'] = parents
        self.uid: uuid.UUID = uuid.uuid4()
        self.order: int = next(_ORDER)

    def __repr__(self):
        return f'{self.__class__.__name__}[uid={self.uid}]'

    @property
    def machines(self) -> typing.Sequence['flow.Machine']:
        """Machines that need to be fitted before this node can be evaluated.

        Returns:
            Sequence of machines this node directly depends on.
        """
        return ()

    @abc.abstractmethod
    def compute(self, *args: typing.Any) -> typing.Any:
        """Calculate the node value given the values of its parents.

        Args:
            *args: Values of the parent nodes (in order).

        Returns:
            Node value.
        """

    def fit(self, runner: typing.Optional['flow.Runner'] = None) -> 'flow.Network':
        """Fit all the machines this node depends on.

        Args:
            runner: Optional runner to execute the fitting (defaults to the configured one).

        Returns:
            The fitted network terminated by this node.
        """
        from . import _network  # pylint: disable=import-outside-toplevel

        return _network.Network(self).fit(runner)

    def __call__(self, *data: typing.Any) -> typing.Any:
        """Evaluate this node.

        Args:
            *data: Optional values to substitute the data of the input sources (in their declaration order).

        Returns:
            Node value.
        """
        from . import _network  # pylint: disable=import-outside-toplevel

        return _network.Network(self)(*data)


class Source(Node):
    """Placeholder node wrapping the network input or target data.

    Args:
        data: Optional data to be provided by this source.
        kind: Source role within the network.
    """

    class Kind(enum.Enum):
        """Source role."""

        INPUT = 'input'
        TARGET = 'target'

    def __init__(self, data: typing.Any = None, kind: typing.Union[str, 'Source.Kind'] = Kind.INPUT):
        super().__init__()
        self.data: typing.Any = data
        self.kind: Source.Kind = self.Kind(kind)

    def __repr__(self):
        return f'Source[{self.kind.value}]'

    def compute(self, *args: typing.Any) -> typing.Any:
        if self.data is None:
            raise _exception.TopologyError(f'No data provided by {self}')
        return self.data


class Operation(Node):
    """Node applying a plain function to the values of its parents.

    Args:
        function: Callable to be applied to the parent values.
        *parents: Upstream nodes.
    """

    def __init__(self, function: typing.Callable[..., typing.Any], *parents: 'flow.Node'):
        if not parents:
            raise _exception.TopologyError('Operation without parents')
        super().__init__(*parents)
        self.function: typing.Callable[..., typing.Any] = function

    def __repr__(self):
        return f'{getattr(self.function, "__name__", repr(self.function))}[uid={self.uid}]'

    def compute(self, *args: typing.Any) -> typing.Any:
        return self.function(*args)


class Prediction(Node):
    """Node producing the predictions of the given machine.

    Args:
        machine: Machine to predict with.
        features: Node providing the features to predict for.
    """

    def __init__(self, machine: 'flow.Machine', features: 'flow.Node'):
        super().__init__(features)
        self.machine: 'flow.Machine' = machine

    def __repr__(self):
        return f'Prediction[{self.machine}]'

    @property
    def machines(self) -> typing.Sequence['flow.Machine']:
        return (self.machine,)

    def compute(self, *args: typing.Any) -> typing.Any:
        return self.machine.predict(*args)


class Transformation(Prediction):
    """Node producing the transformed features of the given (unsupervised) machine."""

    def __repr__(self):
        return f'Transformation[{self.machine}]'

    def compute(self, *args: typing.Any) -> typing.Any:
        return self.machine.transform(*args)


def source(data: typing.Any = None, kind: typing.Union[str, Source.Kind] = Source.Kind.INPUT) -> 'flow.Source':
    """Create a source node.

    Args:
        data: Optional data to be wrapped.
        kind: Source role (``input`` or ``target``).

    Returns:
        Source node.
    """
    return Source(data, kind)


def node(function: typing.Callable[..., typing.Any], *parents: 'flow.Node') -> 'flow.Operation':
    """Lift a plain function to operate on node values.

    Args:
        function: Callable to be applied.
        *parents: Nodes whose values are passed to the function.

    Returns:
        Operation node.
    """
    return Operation(function, *parents)


def predict(machine: 'flow.Machine', features: 'flow.Node') -> 'flow.Prediction':
    """Create a prediction node.

    Args:
        machine: Machine to predict with.
        features: Node providing the features.

    Returns:
        Prediction node.
    """
    return Prediction(machine, features)


def transform(machine: 'flow.Machine', features: 'flow.Node') -> 'flow.Transformation':
    """Create a transformation node.

    Args:
        machine: Machine to transform with.
        features: Node providing the features.

    Returns:
        Transformation node.
    """
    return Transformation(machine, features)
