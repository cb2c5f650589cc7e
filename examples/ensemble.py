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
Homogeneous ensemble of decision trees.

No bagging is used so the member trees only differ thanks to the random feature subsampling at their nodes.
"""
# pylint: disable=invalid-name

from sklearn import datasets, tree

from learnet import evaluation, setup
from learnet.ensemble import Homogeneous

setup.logging()

X, y = datasets.load_diabetes(return_X_y=True, as_frame=True)
atom = tree.DecisionTreeRegressor(max_features=4)
values = evaluation.grid(2, 100, 8, scale='log')

# tuning the regularization of a single tree
single = evaluation.learning_curve(atom, X, y, 'min_samples_split', values, measure='mav', nfolds=9)
for value, measurement in zip(single.parameter_values, single.measurements):
    print(f'single tree min_samples_split={value}: {measurement:.4f}')

# tuning all the trees of the ensemble simultaneously
one_hundred_models = Homogeneous(atom=atom, size=100)
multi = evaluation.learning_curve(
    one_hundred_models, X, y, 'atom__min_samples_split', values, measure='mav', nfolds=9
)
for value, measurement in zip(multi.parameter_values, multi.measurements):
    print(f'ensemble min_samples_split={value}: {measurement:.4f}')
