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

"""Learnet configuration
"""
import abc
import operator
import os
import pathlib
import types
import typing

import tomli

import learnet


class Config(dict):
    """Config parser implementation."""

    def __init__(self, defaults: typing.Mapping[str, typing.Any], *paths: pathlib.Path):
        super().__init__()
        self._sources: list[pathlib.Path] = []
        self._errors: dict[pathlib.Path, Exception] = {}
        self._notifiers: list[typing.Callable[[], None]] = []
        self.update(defaults)
        for src in paths:
            self.read(src)

    def subscribe(self, notifier: typing.Callable[[], None]) -> None:
        """Register a callback to be called upon configuration updates.

        Args:
            notifier: Simple callable to be executed when config gets updated.
        """
        self._notifiers.append(notifier)

    def update(self, other: typing.Optional[typing.Mapping[str, typing.Any]] = None, **kwargs) -> None:
        """Parser config gets updated by recursive merge with right (new) scalar values overwriting left (old) ones.

        Args:
            other: Another mapping with config values to be merged with our config.
            **kwargs: Other values provided as keyword arguments.
        """

        def merge(left: typing.Mapping, right: typing.Mapping) -> typing.Mapping[str, typing.Any]:
            """Recursive merge of two dictionaries with right-to-left precedence. Any non-scalar, non-dictionary objects
            are copied by reference.

            Args:
                left: Left dictionary to be merged.
                right: Right dictionary to be merged.

            Returns:
                Merged dictionary.
            """
            # pylint: disable=isinstance-second-argument-not-valid-type
            result = {}
            common = set(left).intersection(right)
            for key in set(left).union(right):
                if key in common and isinstance(left[key], typing.Mapping) and isinstance(right[key], typing.Mapping):
                    value = merge(left[key], right[key])
                elif key in right:
                    value = right[key]
                else:
                    value = left[key]
                result[key] = value
            return types.MappingProxyType(result)

        super().update(merge(merge(self, other or {}), kwargs))
        for notifier in self._notifiers:
            notifier()

    @property
    def sources(self) -> typing.Iterable[pathlib.Path]:
        """Get the sources files used by this parser.

        Returns:
            Source files.
        """
        return tuple(self._sources)

    @property
    def errors(self) -> typing.Mapping[pathlib.Path, Exception]:
        """Errors captured during parsing.

        Returns:
            Mapping between files and the captured errors.
        """
        return types.MappingProxyType(self._errors)

    def read(self, path: typing.Union[str, pathlib.Path]) -> None:
        """Read and merge config from given file.

        Args:
            path: Path to file to parse.
        """
        path = pathlib.Path(path)
        try:
            with open(path, 'rb') as cfg:
                self.update(tomli.load(cfg))
        except FileNotFoundError:  # not an error (ignore)
            pass
        except PermissionError as err:  # soft error (warn)
            self._errors[path] = err
        except ValueError as err:  # hard error (abort)
            raise learnet.InvalidError(f'Invalid config file {path}: {err}') from err
        else:
            self._sources.append(path)


class Meta(abc.ABCMeta):
    """Metaclass for parsed config options that adds the itemgetter properties to the class."""

    def __new__(mcs, name: str, bases: tuple[type], namespace: dict[str, typing.Any]):
        if 'FIELDS' in namespace:
            for index, field in enumerate(namespace.pop('FIELDS')):
                namespace[field] = property(operator.itemgetter(index))
        return super().__new__(mcs, name, (*bases, tuple), namespace)


class Section(metaclass=Meta):
    """Resolved config base class.

    Implements parser for config referenced based on following concept:

    [GROUP]
    default = reference

    [GROUP.reference]
    <semantic_param> = <value>  # explicit params consumed by the config parser
    <generic_param> = <value>   # generic params not known to the config parser (ie downstream library config)
    params = { <generic_param> = <value> }  # alternative way of providing generic params to avoid collisions
    """

    FIELDS: tuple[str] = ('params',)
    GROUP: str = abc.abstractmethod

    def __new__(cls, reference: str):
        try:
            kwargs = CONFIG[cls.GROUP][reference]  # pylint: disable=no-member
        except (KeyError, TypeError) as err:
            raise learnet.MissingError(f'Config section not found: [{cls.GROUP}.{reference}]') from err
        args, kwargs = cls._extract(reference, kwargs)
        return super().__new__(cls, [*args, types.MappingProxyType(dict(kwargs))])

    @classmethod
    def _extract(
        cls, reference: str, kwargs: typing.Mapping[str, typing.Any]  # pylint: disable=unused-argument
    ) -> tuple[typing.Sequence[typing.Any], typing.Mapping[str, typing.Any]]:
        """Extract the config values as a sequence of "known" semantic arguments and mapping of "generic" options.

        Args:
            reference: Config reference.
            kwargs: Common mapping of values mixing the "known" and "generic".

        Returns:
            Tuple of known plus generic arguments.
        """
        kwargs = dict(kwargs)
        kwargs.update(kwargs.pop(OPT_PARAMS, {}))
        return [], kwargs

    @classmethod
    def resolve(cls, reference: typing.Optional[str] = None) -> 'Section':
        """Get the config instance for the given (or the default) reference.

        Args:
            reference: Config reference.

        Returns:
            Config instance.
        """
        reference = reference or CONFIG.get(cls.GROUP, {}).get(OPT_DEFAULT)
        if not reference:
            raise learnet.MissingError(f'No default reference [{cls.GROUP}].{OPT_DEFAULT}')
        return cls(reference)


class Runner(Section):
    """Runner provider config.

    [RUNNER]
    default = reference

    [RUNNER.reference]
    provider = alias
    <param> = <value>
    """

    FIELDS = ('reference', 'provider', 'params')
    GROUP = 'RUNNER'

    @classmethod
    def _extract(
        cls, reference: str, kwargs: typing.Mapping[str, typing.Any]
    ) -> tuple[typing.Sequence[typing.Any], typing.Mapping[str, typing.Any]]:
        _, kwargs = super()._extract(reference, kwargs)
        try:
            provider = kwargs.pop(OPT_PROVIDER)
        except KeyError as err:
            raise learnet.MissingError(f'Provider not specified for [{cls.GROUP}.{reference}]') from err
        return [reference, provider], kwargs


SECTION_LOGGING = 'LOGGING'
SECTION_RUNNER = 'RUNNER'
SECTION_FOLDING = 'FOLDING'
SECTION_EVALUATION = 'EVALUATION'
OPT_CONFIG = 'config'
OPT_LEVEL = 'level'
OPT_PROVIDER = 'provider'
OPT_PARAMS = 'params'
OPT_DEFAULT = 'default'
OPT_NFOLDS = 'nfolds'
OPT_MEASURE = 'measure'

APPNAME = 'learnet'
#: System-level setup directory
SYSDIR = pathlib.Path('/etc') / APPNAME
#: User-level setup directory
USRDIR = pathlib.Path(os.getenv(f'{APPNAME.upper()}_HOME', pathlib.Path.home() / f'.{APPNAME}'))
#: Sequence of setup directories in ascending priority order
PATH = pathlib.Path(__file__).parent, SYSDIR, USRDIR
#: Main config file name
APPCFG = 'config.toml'

DEFAULTS = {
    # all static defaults should go rather to the ./config.toml (in this package)
    SECTION_LOGGING: {
        OPT_LEVEL: 'INFO',
    },
}

CONFIG = Config(DEFAULTS, *(p / APPCFG for p in PATH))
