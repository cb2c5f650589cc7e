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
Generic tabular payload manipulation.

Payloads can be Pandas dataframes/series, Numpy arrays or plain sequences.
"""
import typing

import numpy
import pandas

import learnet


def nrows(data: typing.Any) -> int:
    """Get the number of rows of the given payload.

    Args:
        data: Payload to be inspected.

    Returns:
        Row count.
    """
    shape = getattr(data, 'shape', None)
    if shape is not None:
        if not shape:
            raise learnet.InvalidError('Scalar payload has no rows')
        return shape[0]
    try:
        return len(data)
    except TypeError as err:
        raise learnet.InvalidError(f'Payload of type {type(data).__name__} has no rows') from err


def take(data: typing.Any, positions: typing.Sequence[int]) -> typing.Any:
    """Select the rows at the given positions (in the given order).

    Pandas payloads keep their original index.

    Args:
        data: Payload to select from.
        positions: Row positions to be selected.

    Returns:
        Payload of the same kind with the selected rows.
    """
    if isinstance(data, (pandas.DataFrame, pandas.Series)):
        return data.iloc[positions]
    if isinstance(data, numpy.ndarray):
        return data[numpy.asarray(positions, dtype=int)]
    return [data[i] for i in positions]


def check_aligned(features: typing.Any, target: typing.Any) -> None:
    """Make sure the features and the target have the same number of rows.

    Args:
        features: Features payload.
        target: Target payload.
    """
    if nrows(features) != nrows(target):
        raise learnet.ShapeMismatchError(
            f'Features ({nrows(features)} rows) not aligned with target ({nrows(target)} rows)'
        )


def vcat(*parts: typing.Any) -> typing.Any:
    """Concatenate the rows of the given payloads in order.

    Args:
        *parts: Payloads to be concatenated.

    Returns:
        Concatenated payload (Pandas if all parts are Pandas, Numpy if any is an array, list otherwise).
    """
    if not parts:
        raise learnet.InvalidError('Nothing to concatenate')
    if all(isinstance(p, pandas.DataFrame) for p in parts) or all(isinstance(p, pandas.Series) for p in parts):
        return pandas.concat(parts, axis='index')
    if any(isinstance(p, (numpy.ndarray, pandas.DataFrame, pandas.Series)) for p in parts):
        return numpy.concatenate([numpy.asarray(p) for p in parts], axis=0)
    return [r for p in parts for r in p]


def table(*columns: typing.Any, names: typing.Optional[typing.Sequence[str]] = None) -> pandas.DataFrame:
    """Assemble a dataframe with one column per each of the given vectors.

    Column order (and the default ``x1``, ``x2``, ... names) strictly follows the order of the arguments.

    Args:
        *columns: Vectors to become the table columns.
        names: Optional column names.

    Returns:
        Pandas dataframe.
    """
    if not columns:
        raise learnet.InvalidError('No columns')
    if names is None:
        names = [f'x{i}' for i in range(1, len(columns) + 1)]
    if len(names) != len(columns):
        raise learnet.ShapeMismatchError(f'Expecting {len(names)} columns ({len(columns)} provided)')
    vectors = []
    for name, column in zip(names, columns):
        vector = numpy.asarray(column)
        if vector.ndim == 2 and vector.shape[1] == 1:
            vector = vector.ravel()
        if vector.ndim != 1:
            raise learnet.ShapeMismatchError(f'Column {name} not a vector (shape {vector.shape})')
        vectors.append(vector)
    if len({len(v) for v in vectors}) > 1:
        raise learnet.ShapeMismatchError(f'Columns of unequal lengths: {[len(v) for v in vectors]}')
    return pandas.DataFrame(dict(zip(names, vectors)), columns=list(names))


def aggregate(function: typing.Callable[..., typing.Any], *parts: typing.Any) -> numpy.ndarray:
    """Element-wise reduction of the given payloads.

    Args:
        function: Numpy-style reducer accepting the stacked values and an ``axis`` keyword.
        *parts: Payloads of the same shape to be reduced.

    Returns:
        Numpy array of the common shape with the reduced values.
    """
    if not parts:
        raise learnet.InvalidError('Nothing to aggregate')
    arrays = [numpy.asarray(p) for p in parts]
    if any(a.shape != arrays[0].shape for a in arrays):
        raise learnet.ShapeMismatchError(f'Parts of unequal shapes: {[a.shape for a in arrays]}')
    return function(numpy.stack(arrays), axis=0)
