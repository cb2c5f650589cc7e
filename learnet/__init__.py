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
Learning networks for model stacking and homogeneous ensembling.
"""

__version__ = '0.1.dev0'


class AnyError(Exception):
    """Base exception of all Learnet errors."""


class InvalidError(AnyError, ValueError):
    """Exception state of an invalid element."""


class MissingError(AnyError):
    """Exception state of a missing element."""


class UnexpectedError(AnyError):
    """Exception state of an unexpected element."""


class InvalidPartitionError(InvalidError):
    """The requested number of folds can't partition the given rows."""


class IndexOutOfRangeError(InvalidError, IndexError):
    """Reference to a non-existent fold."""


class ShapeMismatchError(InvalidError):
    """Row or column counts of payloads that are meant to be aligned disagree."""


class UnfittedModelError(UnexpectedError):
    """Attempt to predict using a model that hasn't been fitted."""
