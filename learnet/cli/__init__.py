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
Learnet command line interface.
"""
import itertools
import shutil
import sys
import typing

import click
from click import core

import learnet
from learnet import setup

from . import _model


class Scope(typing.NamedTuple):
    """Case class for holding the partial command config."""

    config: typing.Optional[str]
    loglevel: typing.Optional[str]

    @staticmethod
    def print(listing: typing.Iterable[typing.Any]) -> None:
        """Print list in pretty columns.

        Args:
            listing: Iterable to be printed into columns.
        """
        listing = tuple(str(i) for i in listing)
        if not listing:
            return
        width = max(len(i) for i in listing) + 2
        count = max(min(shutil.get_terminal_size().columns // width, len(listing)), 1)
        for row in itertools.zip_longest(*(listing[i::count] for i in range(count)), fillvalue=''):
            click.echo(''.join(f'{c:<{width}}' for c in row).rstrip())


@click.group(name='learnet')
@click.option('--config', '-C', type=click.Path(exists=True, file_okay=True), help='Additional config file.')
@click.option(
    '--loglevel',
    '-L',
    type=click.Choice(['debug', 'info', 'warning', 'error'], case_sensitive=False),
    help='Global loglevel to use.',
)
@click.pass_context
def group(context: core.Context, config: typing.Optional[str], loglevel: typing.Optional[str]):
    """Model stacking and ensembling using learning networks."""
    if config:
        setup.CONFIG.read(config)
    setup.logging(level=loglevel)
    context.obj = Scope(config, loglevel)


group.add_command(_model.listing)
group.add_command(_model.evaluate)
group.add_command(_model.curve)


def main() -> None:
    """Cli wrapper for handling Learnet exceptions."""
    try:
        group()  # pylint: disable=no-value-for-parameter
    except learnet.AnyError as err:
        print(err, file=sys.stderr)
        sys.exit(1)
