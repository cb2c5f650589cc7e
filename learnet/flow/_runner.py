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
Network fitting runners.
"""
import abc
import logging
import typing

from learnet import provider, setup

if typing.TYPE_CHECKING:
    from learnet import flow
    from learnet.flow import _network

LOGGER = logging.getLogger(__name__)


class Runner(provider.Service, path=['learnet.provider.runner']):
    """Abstract runner executing the fitting of the network machines.

    Providers are registered under their alias and selected either explicitly or using the ``[RUNNER]`` config
    section.
    """

    def __repr__(self):
        return self.__class__.__module__.rsplit('.', 1)[-1]

    @abc.abstractmethod
    def fit(self, levels: typing.Sequence[typing.Sequence['flow.Machine']], evaluation: '_network.Evaluation') -> None:
        """Fit all the machines level by level.

        Args:
            levels: Machines grouped into mutually independent levels in their dependency order.
            evaluation: Evaluation pass to use for computing the machine arguments.
        """

    @staticmethod
    def arguments(
        level: typing.Sequence['flow.Machine'], evaluation: '_network.Evaluation'
    ) -> typing.Sequence[tuple[typing.Any, ...]]:
        """Compute the training data for each of the given machines.

        Args:
            level: Machines to compute the arguments for.
            evaluation: Evaluation pass to compute with.

        Returns:
            Sequence of argument values for each machine.
        """
        return tuple(tuple(evaluation[a] for a in m.args) for m in level)

    @classmethod
    def resolve(cls, reference: typing.Optional[str] = None) -> 'flow.Runner':
        """Create the runner instance based on the given (or default) config reference.

        Args:
            reference: Name of the ``[RUNNER.<reference>]`` config section.

        Returns:
            Runner instance.
        """
        config = setup.Runner.resolve(reference)
        LOGGER.debug('Using %s runner (%s)', config.reference, config.provider)
        return cls[config.provider](**config.params)  # pylint: disable=unsubscriptable-object
