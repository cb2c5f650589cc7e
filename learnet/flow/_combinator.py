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
Combinators lifting the payload operations to the network nodes.
"""
import functools
import typing

import numpy

from learnet import payload

from . import _exception, _node

if typing.TYPE_CHECKING:
    from learnet import flow


def reduce(function: typing.Callable[..., typing.Any], *nodes: 'flow.Node') -> 'flow.Operation':
    """Create a node representing the element-wise reduction of the values of the given nodes.

    Args:
        function: Numpy-style reducer accepting the stacked values and an ``axis`` keyword.
        *nodes: Nodes whose values get reduced.

    Returns:
        Operation node.
    """
    if not nodes:
        raise _exception.TopologyError('Nothing to reduce')
    return _node.Operation(functools.partial(payload.aggregate, function), *nodes)


def mean(*nodes: 'flow.Node') -> 'flow.Operation':
    """Element-wise arithmetic mean of the node values.

    Args:
        *nodes: Nodes to be averaged.

    Returns:
        Operation node.
    """
    return reduce(numpy.mean, *nodes)


def sum(*nodes: 'flow.Node') -> 'flow.Operation':  # pylint: disable=redefined-builtin
    """Element-wise sum of the node values.

    Args:
        *nodes: Nodes to be summed up.

    Returns:
        Operation node.
    """
    return reduce(numpy.sum, *nodes)


def folds(data: 'flow.Node', nfolds: int) -> 'flow.Operation':
    """Node producing the fold partition of the rows of the given data node.

    Args:
        data: Node whose rows are to be partitioned.
        nfolds: Number of folds.

    Returns:
        Operation node.
    """
    return _node.Operation(functools.partial(payload.folds, nfolds=nfolds), data)


def restrict(data: 'flow.Node', partition: 'flow.Node', index: int) -> 'flow.Operation':
    """Node restricting the data to the given fold.

    Args:
        data: Node providing the data.
        partition: Node providing the fold partition.
        index: Fold index.

    Returns:
        Operation node.
    """
    return _node.Operation(functools.partial(payload.restrict, index=index), data, partition)


def corestrict(data: 'flow.Node', partition: 'flow.Node', index: int) -> 'flow.Operation':
    """Node restricting the data to the complement of the given fold.

    Args:
        data: Node providing the data.
        partition: Node providing the fold partition.
        index: Fold index.

    Returns:
        Operation node.
    """
    return _node.Operation(functools.partial(payload.corestrict, index=index), data, partition)


def vcat(*nodes: 'flow.Node') -> 'flow.Operation':
    """Node concatenating the rows of the given nodes.

    Args:
        *nodes: Nodes to be concatenated (in order).

    Returns:
        Operation node.
    """
    return _node.Operation(payload.vcat, *nodes)


def table(*nodes: 'flow.Node', names: typing.Optional[typing.Sequence[str]] = None) -> 'flow.Operation':
    """Node assembling a table with one column per each of the given nodes.

    Args:
        *nodes: Nodes providing the columns (in order).
        names: Optional column names.

    Returns:
        Operation node.
    """
    return _node.Operation(functools.partial(payload.table, names=names), *nodes)
