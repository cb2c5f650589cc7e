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
Dask runner.
"""
import logging
import typing

import dask

from learnet import flow

if typing.TYPE_CHECKING:
    from learnet.flow import _network

LOGGER = logging.getLogger(__name__)


class Runner(flow.Runner, alias='dask'):
    """Runner fitting the mutually independent machines of each level in parallel using the
    :doc:`Dask computing library <dask:index>`.

    Each machine gets trained on its private copy of the model while its (already computed) arguments are only read.

    Args:
        kwargs: Any :doc:`Dask Configuration options <dask:configuration>`.

                Noteworthy parameters:
                   * ``scheduler`` selects the :doc:`scheduling implementation <dask:scheduling>`
                     (valid options are: ``synchronous``, ``threads``, ``processes``)

    The provider can be enabled using the following config:

    .. code-block:: toml
       :caption: config.toml

        [RUNNER.compute]
        provider = "dask"
        scheduler = "processes"

    Important:
        Select the ``dask`` extras to install Learnet together with the Dask support.
    """

    DEFAULTS = {
        'scheduler': 'threads',
    }

    def __init__(self, **kwargs):
        self._config: typing.Mapping[str, typing.Any] = self.DEFAULTS | kwargs

    def fit(self, levels: typing.Sequence[typing.Sequence[flow.Machine]], evaluation: '_network.Evaluation') -> None:
        with dask.config.set(self._config):
            for index, level in enumerate(levels):
                LOGGER.debug('Submitting level %d (%d machines)', index, len(level))
                jobs = (
                    dask.delayed(flow.Machine.train, pure=False)(m.model, *a)
                    for m, a in zip(level, self.arguments(level, evaluation))
                )
                for machine, estimator in zip(level, dask.compute(*jobs)):
                    machine.assign(estimator)
