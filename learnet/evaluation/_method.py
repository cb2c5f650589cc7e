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
Evaluation and tuning methods.
"""
import logging
import typing

import numpy
from sklearn import metrics, model_selection

import learnet
from learnet import setup

LOGGER = logging.getLogger(__name__)


def rms(true: typing.Any, predicted: typing.Any) -> float:
    """Root mean squared error.

    Args:
        true: True target values.
        predicted: Predicted values.

    Returns:
        The error value.
    """
    return float(numpy.sqrt(metrics.mean_squared_error(true, predicted)))


def mav(true: typing.Any, predicted: typing.Any) -> float:
    """Mean absolute value of the error.

    Args:
        true: True target values.
        predicted: Predicted values.

    Returns:
        The error value.
    """
    return float(metrics.mean_absolute_error(true, predicted))


#: Available measures (all of them losses - the lower the better).
MEASURES: typing.Mapping[str, typing.Callable[[typing.Any, typing.Any], float]] = {
    'rms': rms,
    'mav': mav,
    'mae': mav,
}


class Outcome(typing.NamedTuple):
    """Cross-validated measurement of a model."""

    measure: str
    mean: float
    per_fold: tuple[float]


class Curve(typing.NamedTuple):
    """Learning curve of a model over a range of values of one of its parameters."""

    parameter_name: str
    parameter_values: tuple[typing.Any]
    measurements: tuple[float]


def _setup(
    measure: typing.Optional[str], nfolds: typing.Optional[int]
) -> tuple[str, typing.Callable[..., float], model_selection.KFold]:
    """Resolve the measure and the cross-validator using the config defaults.

    Args:
        measure: Optional measure name.
        nfolds: Optional number of folds.

    Returns:
        Tuple of the measure name, the scorer and the cross-validator.
    """
    config = setup.CONFIG[setup.SECTION_EVALUATION]
    measure = measure if measure is not None else config[setup.OPT_MEASURE]
    nfolds = nfolds if nfolds is not None else config[setup.OPT_NFOLDS]
    try:
        scorer = metrics.make_scorer(MEASURES[measure], greater_is_better=False)
    except KeyError as err:
        raise learnet.InvalidError(f'Unknown measure {measure} (known: {", ".join(MEASURES)})') from err
    if nfolds < 2:
        raise learnet.InvalidPartitionError(f'At least 2 folds required ({nfolds} requested)')
    return measure, scorer, model_selection.KFold(n_splits=nfolds)


def evaluate(
    model: typing.Any,
    features: typing.Any,
    target: typing.Any,
    measure: typing.Optional[str] = None,
    nfolds: typing.Optional[int] = None,
) -> Outcome:
    """Estimate the model performance using the k-fold cross-validation.

    Args:
        model: Model configuration to be evaluated.
        features: Features dataset.
        target: Target values.
        measure: Name of the measure (defaults to the ``[EVALUATION]`` config).
        nfolds: Number of folds (defaults to the ``[EVALUATION]`` config).

    Returns:
        Evaluation outcome.
    """
    measure, scorer, crossvalidator = _setup(measure, nfolds)
    LOGGER.debug('Evaluating %s using %d folds', model, crossvalidator.get_n_splits())
    scores = model_selection.cross_val_score(
        model, features, target, scoring=scorer, cv=crossvalidator, error_score='raise'
    )
    per_fold = tuple(float(s) for s in -scores)
    outcome = Outcome(measure, float(numpy.mean(per_fold)), per_fold)
    LOGGER.info('Evaluated %s: %s = %.4f', model.__class__.__name__, measure, outcome.mean)
    return outcome


def grid(
    lower: float, upper: float, points: int = 10, scale: str = 'linear', integer: bool = True
) -> tuple[typing.Any]:
    """Generate a range of parameter values.

    Args:
        lower: Lowest value.
        upper: Highest value.
        points: Number of values (less if the integer rounding produces duplicates).
        scale: Spacing of the values (``linear`` or ``log``).
        integer: Round the values to integers.

    Returns:
        Sorted tuple of the values.
    """
    if points < 1 or lower > upper:
        raise learnet.InvalidError(f'Invalid range [{lower}, {upper}] with {points} points')
    if scale == 'linear':
        values = numpy.linspace(lower, upper, points)
    elif scale == 'log':
        if lower <= 0:
            raise learnet.InvalidError('Log scale requires positive bounds')
        values = numpy.geomspace(lower, upper, points)
    else:
        raise learnet.InvalidError(f'Unknown scale: {scale}')
    if integer:
        return tuple(int(v) for v in numpy.unique(numpy.round(values).astype(int)))
    return tuple(float(v) for v in values)


def learning_curve(
    model: typing.Any,
    features: typing.Any,
    target: typing.Any,
    param: str,
    values: typing.Sequence[typing.Any],
    measure: typing.Optional[str] = None,
    nfolds: typing.Optional[int] = None,
) -> Curve:
    """Cross-validated measurements of the model for each of the given parameter values.

    Args:
        model: Model configuration to be tuned.
        features: Features dataset.
        target: Target values.
        param: Name of the parameter to vary (nested parameters like ``atom__min_samples_split`` are supported).
        values: Parameter values to be measured.
        measure: Name of the measure (defaults to the ``[EVALUATION]`` config).
        nfolds: Number of folds (defaults to the ``[EVALUATION]`` config).

    Returns:
        Learning curve.
    """
    _, scorer, crossvalidator = _setup(measure, nfolds)
    values = tuple(values)
    if not values:
        raise learnet.InvalidError('No parameter values')
    if param not in model.get_params(deep=True):
        raise learnet.InvalidError(f'Unknown parameter {param} of {model.__class__.__name__}')
    LOGGER.debug('Measuring %s over %d values of %s', model.__class__.__name__, len(values), param)
    _, scores = model_selection.validation_curve(
        model,
        features,
        target,
        param_name=param,
        param_range=values,
        cv=crossvalidator,
        scoring=scorer,
        error_score='raise',
    )
    return Curve(param, values, tuple(float(s) for s in -scores.mean(axis=1)))
