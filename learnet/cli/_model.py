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
Model catalog commands.
"""
import typing

import click
from sklearn import datasets
from sklearn import ensemble as skensemble
from sklearn import linear_model, neighbors, tree

from learnet import ensemble, evaluation

if typing.TYPE_CHECKING:
    from learnet import cli


def forest() -> skensemble.RandomForestRegressor:
    """Random forest regressor."""
    return skensemble.RandomForestRegressor(n_estimators=200, min_samples_split=3, max_features=4)


def ridge() -> linear_model.Ridge:
    """Ridge regressor."""
    return linear_model.Ridge(alpha=0.01)


#: Named factories of the models available from the command line.
CATALOG: typing.Mapping[str, typing.Callable[[], typing.Any]] = {
    'linear': linear_model.LinearRegression,
    'ridge': ridge,
    'knn': lambda: neighbors.KNeighborsRegressor(n_neighbors=4),
    'tree': lambda: tree.DecisionTreeRegressor(min_samples_leaf=1),
    'forest': forest,
    'average': lambda: ensemble.AverageTwo(regressor1=forest(), regressor2=ridge()),
    'stack': lambda: ensemble.TwoModelStack(regressor1=forest(), regressor2=ridge(), judge=ridge()),
    'ensemble': ensemble.Homogeneous,
}


def dataset() -> tuple[typing.Any, typing.Any]:
    """The demo dataset.

    Returns:
        Tuple of features and target.
    """
    return datasets.load_diabetes(return_X_y=True, as_frame=True)


@click.command(name='list')
@click.pass_obj
def listing(scope: 'cli.Scope') -> None:
    """List the available models."""
    scope.print(CATALOG)


@click.command()
@click.argument('model', type=click.Choice(sorted(CATALOG)))
@click.option('--nfolds', '-n', type=int, help='Number of cross-validation folds.')
@click.option('--measure', '-m', type=click.Choice(sorted(evaluation.MEASURES)), help='Evaluation measure.')
def evaluate(model: str, nfolds: typing.Optional[int], measure: typing.Optional[str]) -> None:
    """Evaluate the model on the demo dataset."""
    outcome = evaluation.evaluate(CATALOG[model](), *dataset(), measure=measure, nfolds=nfolds)
    click.echo(f'{model}: {outcome.measure}={outcome.mean:.4f}')
    click.echo('per fold: ' + ', '.join(f'{v:.4f}' for v in outcome.per_fold))


@click.command()
@click.argument('model', type=click.Choice(sorted(CATALOG)))
@click.argument('param')
@click.option('--lower', type=float, required=True, help='Lowest parameter value.')
@click.option('--upper', type=float, required=True, help='Highest parameter value.')
@click.option('--points', type=int, default=5, show_default=True, help='Number of parameter values.')
@click.option('--scale', type=click.Choice(['linear', 'log']), default='linear', show_default=True)
@click.option('--real', is_flag=True, help='Use real (not integer) parameter values.')
@click.option('--nfolds', '-n', type=int, help='Number of cross-validation folds.')
@click.option('--measure', '-m', type=click.Choice(sorted(evaluation.MEASURES)), help='Evaluation measure.')
def curve(
    model: str,
    param: str,
    lower: float,
    upper: float,
    points: int,
    scale: str,
    real: bool,
    nfolds: typing.Optional[int],
    measure: typing.Optional[str],
) -> None:
    """Print the learning curve of the model over a range of the given parameter values."""
    values = evaluation.grid(lower, upper, points, scale=scale, integer=not real)
    result = evaluation.learning_curve(CATALOG[model](), *dataset(), param, values, measure=measure, nfolds=nfolds)
    click.echo(f'{result.parameter_name:>24} measurement')
    for value, measurement in zip(result.parameter_values, result.measurements):
        click.echo(f'{value:>24} {measurement:.4f}')
