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
Learning network logic.
"""

from ._combinator import corestrict, folds, mean, reduce, restrict, sum, table, vcat  # pylint: disable=redefined-builtin
from ._exception import TopologyError
from ._machine import Machine, machine
from ._network import Evaluation, Network
from ._node import Node, Operation, Prediction, Source, Transformation, node, predict, source, transform
from ._runner import Runner

__all__ = [
    'corestrict',
    'Evaluation',
    'folds',
    'Machine',
    'machine',
    'mean',
    'Network',
    'node',
    'Node',
    'Operation',
    'predict',
    'Prediction',
    'reduce',
    'restrict',
    'Runner',
    'source',
    'Source',
    'sum',
    'table',
    'TopologyError',
    'transform',
    'Transformation',
    'vcat',
]
