"""Build the quadratic form x^T Q x, differentiate it and minimize it with CVXPy.

The objective is minimized subject to the linear constraint x_0 + x_1 >= 1,
whose (A, b) form is printed before solving.
"""

import cvxpy as cp
import numpy as np

from symbolicmath import Environment, KMatrix
from symbolicmath.lowerers.cvxpy import CvxpyLowerer, make_variable_map

env = Environment("quadratic")
x = env.new_variable_vector(2)  # Decision vector with 2 entries

Q = KMatrix(np.array([[1.0, 0.0], [0.0, 2.0]]))

objective = x.T @ Q @ x  # Polynomial x_0^2 + 2 x_1^2
gradient = [objective.derivative_wrt(v) for v in x]

constraint = x[0] + x[1] >= 1
A, b = constraint.linear_inequality_constraint_representation(list(x))

if __name__ == "__main__":
    print(f"objective:  {objective}")
    print(f"gradient:   [{', '.join(str(g) for g in gradient)}]")
    print(f"constraint: {constraint}  ->  A = {A}, b = {b}")

    variable_map = make_variable_map(list(x))
    lowerer = CvxpyLowerer(variable_map)
    problem = cp.Problem(cp.Minimize(lowerer.lower(objective)), [lowerer.lower(constraint)])
    problem.solve()

    # Expected optimum: x = (2/3, 1/3) with value 2/3
    print(f"optimal value: {problem.value:.4f}")
    print(f"x = {[round(float(variable_map[v].value), 4) for v in x]}")
