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
Provider management.
"""
import abc
import collections
import inspect
import logging
import typing

import learnet

LOGGER = logging.getLogger(__name__)


class Bank(collections.namedtuple('Bank', 'provider, paths')):
    """Registry of providers of certain interface. It is a tuple of (not-yet-imported) search paths and already
    imported providers.
    """

    provider: dict[str, type['Service']]
    paths: set[str]

    def __new__(cls):
        return super().__new__(cls, dict(), set())  # pylint: disable=use-dict-literal

    def add(self, provider: type['Service'], alias: typing.Optional[str], paths: typing.Iterable[str]) -> None:
        """Register the provider and push its search paths to the lazy loading stack.

        Args:
            provider: Implementation class.
            alias: Provider alias.
            paths: Search paths to be explored when attempting to load.
        """
        self.paths.update(paths)
        if not alias:
            return
        if alias in self.provider and self.provider[alias] is not provider:
            raise learnet.UnexpectedError(f'Provider reference collision ({alias})')
        LOGGER.debug('Registering provider %s as `%s`', provider.__name__, alias)
        self.provider[alias] = provider

    def get(self, alias: str) -> type['Service']:
        """Get the registered provider or attempt to load all search paths packages that might be containing it.

        Args:
            alias: Provider alias.

        Returns:
            Registered provider.
        """
        LOGGER.debug('Getting provider of %s (%d search paths)', alias, len(self.paths))
        if alias not in self.provider:
            paths = [*self.paths, *(f'{p}.{alias}' for p in self.paths)]
            while alias not in self.provider and paths:
                load(paths.pop())
        return self.provider[alias]


def load(path: str) -> None:
    """Import the given module ignoring it if it doesn't exist.

    Args:
        path: Module to be imported.
    """
    LOGGER.debug('Attempting to import %s', path)
    try:
        __import__(path, fromlist=['*'])
    except ModuleNotFoundError as err:
        if not path.startswith(err.name):
            raise err


BANK: dict[type['Service'], Bank] = collections.defaultdict(Bank)


class Meta(abc.ABCMeta):
    """Provider metaclass."""

    def __getitem__(cls, alias: str) -> type['Service']:
        try:
            return BANK[cls].get(alias)
        except KeyError as err:
            known = ', '.join(sorted(cls))  # pylint: disable=not-an-iterable
            raise learnet.MissingError(
                f'No {cls.__name__} provider registered as {alias} (known providers: {known})'
            ) from err

    def __iter__(cls):
        return iter(BANK[cls].provider)


class Service(metaclass=Meta):
    """Base class for service providers."""

    def __init_subclass__(cls, alias: typing.Optional[str] = None, path: typing.Optional[typing.Iterable[str]] = None):
        """Register the provider based on its optional alias.

        Args:
            alias: Optional reference to register the provider as.
            path: Optional search path for additional packages to get imported when attempting to load.
        """
        super().__init_subclass__()
        if alias and inspect.isabstract(cls):
            raise learnet.UnexpectedError(f'Provider reference ({alias}) illegal on abstract class')
        for parent in (p for p in cls.__mro__ if issubclass(p, Service) and p is not Service):
            BANK[parent].add(cls, alias, path or [])
