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
Sequential runner.
"""
import logging
import typing

from learnet import flow

if typing.TYPE_CHECKING:
    from learnet.flow import _network

LOGGER = logging.getLogger(__name__)


class Runner(flow.Runner, alias='sequential'):
    """Runner fitting all the machines one by one in the current thread."""

    def fit(self, levels: typing.Sequence[typing.Sequence[flow.Machine]], evaluation: '_network.Evaluation') -> None:
        for index, level in enumerate(levels):
            LOGGER.debug('Fitting level %d (%d machines)', index, len(level))
            for machine, args in zip(level, self.arguments(level, evaluation)):
                machine.fit(*args)
