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
Learning network assembly and lazy evaluation.
"""
import functools
import logging
import typing

from . import _exception, _node, _runner

if typing.TYPE_CHECKING:
    from learnet import flow

LOGGER = logging.getLogger(__name__)


class Evaluation:
    """Single evaluation pass of a network.

    Each node is computed on demand and at most once per pass - its value is memoized for the lifetime of the pass.
    Sources can be bound to explicit data overriding their own.

    Args:
        bindings: Optional mapping of source nodes to the data they should provide within this pass.
    """

    def __init__(self, bindings: typing.Optional[typing.Mapping['flow.Source', typing.Any]] = None):
        self._bindings: typing.Mapping['flow.Source', typing.Any] = dict(bindings or {})
        self._cache: dict['flow.Node', typing.Any] = {}

    def __contains__(self, node: 'flow.Node') -> bool:
        return node in self._cache

    def __getitem__(self, node: 'flow.Node') -> typing.Any:
        if node not in self._cache:
            if node in self._bindings:
                value = self._bindings[node]
            else:
                value = node.compute(*(self[p] for p in node.parents))
            self._cache[node] = value
        return self._cache[node]


class Network:
    """Directed acyclic graph of all the nodes and machines upstream of the given tail node.

    Args:
        tail: Terminal node of the network.
    """

    def __init__(self, tail: 'flow.Node'):
        if not isinstance(tail, _node.Node):
            raise _exception.TopologyError(f'Not a node: {tail}')
        self.tail: 'flow.Node' = tail
        nodes = set()
        pending = [tail]
        while pending:
            current = pending.pop()
            if current in nodes:
                continue
            nodes.add(current)
            pending.extend(current.parents)
            pending.extend(a for m in current.machines for a in m.args)
        self.nodes: tuple['flow.Node'] = tuple(sorted(nodes, key=lambda n: n.order))
        self.machines: tuple['flow.Machine'] = tuple({m: None for n in self.nodes for m in n.machines})

    def __repr__(self):
        return f'Network[{self.tail}]'

    @property
    def sources(self) -> typing.Sequence['flow.Source']:
        """All the sources of this network in their declaration order.

        Returns:
            Sequence of source nodes.
        """
        return tuple(n for n in self.nodes if isinstance(n, _node.Source))

    @property
    def inputs(self) -> typing.Sequence['flow.Source']:
        """The input (non-target) sources of this network in their declaration order.

        Returns:
            Sequence of input source nodes.
        """
        return tuple(s for s in self.sources if s.kind is _node.Source.Kind.INPUT)

    @functools.cached_property
    def levels(self) -> typing.Sequence[typing.Sequence['flow.Machine']]:
        """Machines grouped by their dependency depth.

        Machines within the same level are mutually independent and can be fitted in any order (or in parallel) once
        all the previous levels have been fitted.

        Returns:
            Sequence of machine groups in the fitting order.
        """

        @functools.lru_cache(maxsize=None)
        def level(node: 'flow.Node') -> int:
            """Depth of the deepest machine upstream of the given node."""
            return max([level(p) for p in node.parents] + [depth(m) for m in node.machines], default=0)

        @functools.lru_cache(maxsize=None)
        def depth(machine: 'flow.Machine') -> int:
            """Depth of the given machine."""
            return 1 + max(level(a) for a in machine.args)

        groups: dict[int, list['flow.Machine']] = {}
        for machine in self.machines:
            groups.setdefault(depth(machine), []).append(machine)
        return tuple(tuple(groups[d]) for d in sorted(groups))

    def fit(self, runner: typing.Optional['flow.Runner'] = None) -> 'flow.Network':
        """Fit all the machines of this network.

        Args:
            runner: Optional runner to execute the fitting (defaults to the configured one).

        Returns:
            Self.
        """
        runner = runner or _runner.Runner.resolve()
        LOGGER.debug('Fitting %d machines in %d levels using %s', len(self.machines), len(self.levels), runner)
        runner.fit(self.levels, Evaluation())
        return self

    def __call__(self, *data: typing.Any) -> typing.Any:
        """Evaluate the tail node.

        Args:
            *data: Optional values to substitute the data of the input sources (in their declaration order).

        Returns:
            Value of the tail node.
        """
        bindings = {}
        if data:
            inputs = self.inputs
            if len(data) != len(inputs):
                raise _exception.TopologyError(f'Network expecting {len(inputs)} inputs ({len(data)} provided)')
            bindings = dict(zip(inputs, data))
        return Evaluation(bindings)[self.tail]
