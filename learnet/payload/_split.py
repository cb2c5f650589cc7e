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
Fold partitioning and restrictions.
"""
import logging
import numbers
import typing

import numpy
from sklearn import model_selection

import learnet

from . import _frame

LOGGER = logging.getLogger(__name__)

#: Ordered sequence of disjoint row position arrays covering all the rows.
Partition = typing.Sequence[numpy.ndarray]


def folds(data: typing.Any, nfolds: int) -> Partition:
    """Partition the rows into contiguous folds of sizes differing by at most one.

    The folds preserve the row order both within and across them so concatenating them gives back the original
    row sequence.

    Args:
        data: Payload to be partitioned or directly its row count.
        nfolds: Number of folds.

    Returns:
        Tuple of ``nfolds`` arrays of row positions.
    """
    count = int(data) if isinstance(data, numbers.Integral) else _frame.nrows(data)
    if not isinstance(nfolds, numbers.Integral) or not 1 < nfolds <= count:
        raise learnet.InvalidPartitionError(f'Invalid number of folds {nfolds} for {count} rows')
    splitter = model_selection.KFold(n_splits=nfolds)
    partition = tuple(test for _, test in splitter.split(numpy.arange(count)))
    LOGGER.debug('Partitioned %d rows into %d folds', count, nfolds)
    return partition


def _check(data: typing.Any, partition: Partition, index: int) -> None:
    """Validate the restriction request.

    Args:
        data: Payload to be restricted.
        partition: Fold partition.
        index: Fold index.
    """
    if not isinstance(index, numbers.Integral) or not 0 <= index < len(partition):
        raise learnet.IndexOutOfRangeError(f'Fold index {index} out of range [0, {len(partition)})')
    if sum(len(f) for f in partition) != _frame.nrows(data):
        raise learnet.ShapeMismatchError(f'Partition not matching the {_frame.nrows(data)} data rows')


def restrict(data: typing.Any, partition: Partition, index: int) -> typing.Any:
    """Restrict the data to the rows of the given fold.

    Args:
        data: Payload to be restricted.
        partition: Fold partition.
        index: Fold index.

    Returns:
        Payload with just the fold rows.
    """
    _check(data, partition, index)
    return _frame.take(data, partition[index])


def corestrict(data: typing.Any, partition: Partition, index: int) -> typing.Any:
    """Restrict the data to the rows of all but the given fold (the fold complement).

    The rows appear in the original order - the other folds are visited in ascending index order.

    Args:
        data: Payload to be restricted.
        partition: Fold partition.
        index: Fold index.

    Returns:
        Payload with the fold complement rows.
    """
    _check(data, partition, index)
    others = [f for i, f in enumerate(partition) if i != index]
    positions = numpy.concatenate(others) if others else numpy.empty(0, dtype=int)
    return _frame.take(data, positions)
