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
Defining a two-model stack by hand.

A basic stack consists of a number of base learners and a single adjudicating model. When making predictions, the
base learner predictions become the columns of the adjudicator input table. During training, however, the
adjudicator is fed with *out-of-sample* base learner predictions - each base learner is trained on every fold
complement and its predictions on the folds are spliced together. Each base learner also gets one more machine
trained on all the data which serves the prediction path.
"""
# pylint: disable=invalid-name

import numpy
from sklearn import compose, datasets, linear_model, neighbors, preprocessing

from learnet import composite, evaluation, flow, setup
from learnet.ensemble import AverageTwo

setup.logging()


def steps(x: numpy.ndarray) -> numpy.ndarray:
    """Step function to be learned."""
    return numpy.select([x < -1.5, x < 1.5], [-1.0, 0.0], 1.0)


x = numpy.array([-4, -1, 2, -3, 0, 3, -2, 1, 4], dtype=float)
X = flow.source(x.reshape(-1, 1))
y = flow.source(steps(x), kind='target')

linear = linear_model.LinearRegression()
knn = neighbors.KNeighborsRegressor(n_neighbors=4)
model1, model2, judge = linear, knn, linear

# fold partition of the rows (three contiguous blocks)
f = flow.folds(X, 3)
print('folds:', [list(i) for i in f()])

# out-of-sample predictions of each model
y1_oos = flow.vcat(
    *(
        flow.predict(flow.machine(model1, flow.corestrict(X, f, i), flow.corestrict(y, f, i)), flow.restrict(X, f, i))
        for i in range(3)
    )
)
y2_oos = flow.vcat(
    *(
        flow.predict(flow.machine(model2, flow.corestrict(X, f, i), flow.corestrict(y, f, i)), flow.restrict(X, f, i))
        for i in range(3)
    )
)
y1_oos.fit()
print('linear oos:', y1_oos())

# adjudicator trained on the out-of-sample predictions
m_judge = flow.machine(judge, flow.table(y1_oos, y2_oos), y)

# base models trained on all data for the prediction path
y1 = flow.predict(flow.machine(model1, X, y), X)
y2 = flow.predict(flow.machine(model2, X, y), X)
yhat = flow.predict(m_judge, flow.table(y1, y2))
network = yhat.fit()

e1 = evaluation.rms(y(), y1())
e2 = evaluation.rms(y(), y2())
emean = evaluation.rms(y(), flow.mean(y1, y2)())
estack = evaluation.rms(y(), network())
print(f'e1={e1:.4f} e2={e2:.4f} emean={emean:.4f} estack={estack:.4f}')


# exporting the network as a reusable model type
def my_two_model_stack(features, target, *, regressor1, regressor2, judge):  # pylint: disable=redefined-outer-name
    """Three-fold two-model stack."""
    partition = flow.folds(features, 3)
    oos = []
    for base in (regressor1, regressor2):
        oos.append(
            flow.vcat(
                *(
                    flow.predict(
                        flow.machine(
                            base, flow.corestrict(features, partition, i), flow.corestrict(target, partition, i)
                        ),
                        flow.restrict(features, partition, i),
                    )
                    for i in range(3)
                )
            )
        )
    adjudicator = flow.machine(judge, flow.table(*oos), target)
    full = (flow.predict(flow.machine(b, features, target), features) for b in (regressor1, regressor2))
    return flow.predict(adjudicator, flow.table(*full))


MyTwoModelStack = composite.export(
    'MyTwoModelStack', my_two_model_stack, regressor1=model1, regressor2=model2, judge=judge
)

# preparing a real dataset: the categorical column gets one-hot encoded and the log target standardized, both by
# unsupervised machines of their own
X0, y0 = datasets.load_diabetes(return_X_y=True, as_frame=True)
X0['sex'] = numpy.where(X0['sex'] > 0, 'male', 'female')

X1 = flow.source(X0)
encoder = compose.ColumnTransformer(
    [('hot', preprocessing.OneHotEncoder(), ['sex'])], remainder='passthrough', sparse_threshold=0
)
hot = flow.transform(flow.machine(encoder, X1), X1)
hot.fit()
features = hot()

y1 = flow.node(lambda v: numpy.log(numpy.asarray(v)).reshape(-1, 1), flow.source(y0))
standardized = flow.node(numpy.ravel, flow.transform(flow.machine(preprocessing.StandardScaler(), y1), y1))
standardized.fit()
target = standardized()

ridge = linear_model.Ridge(alpha=0.01)
for model in (
    linear,
    AverageTwo(regressor1=linear, regressor2=knn),
    MyTwoModelStack(regressor1=ridge, regressor2=knn, judge=ridge),
):
    print(model.__class__.__name__, evaluation.evaluate(model, features, target, measure='rms'))
