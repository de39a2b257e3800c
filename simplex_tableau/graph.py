"""
2-D graph data for two-variable problems.

Consumes only the LPProblem and a Solution's decision values and objective
value; the iteration history is never looked at here.
"""

import itertools
import math

import matplotlib.pyplot as plt
import numpy as np

from .model import GraphData, VisualizationSupport

DEFAULT_RANGE = 20.0
IS_3D_AVAILABLE = False
TOL = 1e-6


def can_visualize_problem(problem):
    if problem is None:
        return VisualizationSupport(False, False, "No problem data to visualize.")

    can_2d = problem.num_decision_vars == 2
    can_3d = IS_3D_AVAILABLE and problem.num_decision_vars == 3
    message = ""
    if not can_2d and not can_3d:
        message = "This problem cannot be drawn; graphs are only available for problems with 2 variables."
    return VisualizationSupport(can_2d, can_3d, message)


def get_visualization_options(problem):
    support = can_visualize_problem(problem)
    options = []
    if support.can_2d:
        options.append({
            'id': '2d',
            'name': '2D Graph',
            'description': 'Feasible region, constraint lines and optimal point on the x1-x2 plane.',
        })
    if support.can_3d:
        options.append({
            'id': '3d',
            'name': '3D Graph',
            'description': 'Feasible region and optimal point in three dimensions.',
        })
    options.append({
        'id': 'iterations',
        'name': 'Iteration Tables',
        'description': 'Every simplex tableau with its pivot.',
    })
    return options


def _segment_in_box(a, b, rhs, x_max, y_max):
    """Clip the line a*x + b*y = rhs to the box [0, x_max] x [0, y_max]"""
    points = []
    if abs(b) > TOL:
        for x in (0.0, x_max):
            points.append((x, (rhs - a * x) / b))
    if abs(a) > TOL:
        for y in (0.0, y_max):
            points.append(((rhs - b * y) / a, y))

    inside = []
    for x, y in points:
        if -TOL <= x <= x_max + TOL and -TOL <= y <= y_max + TOL:
            point = (round(x + 0.0, 9), round(y + 0.0, 9))
            if point not in inside:
                inside.append(point)
    inside.sort()
    return [{'x': x, 'y': y} for x, y in inside]


def feasible_vertices(problem):
    """Corner points of the feasible region, counter-clockwise around their centroid"""
    boundaries = [(c.coeffs[0], c.coeffs[1], c.rhs) for c in problem.constraints]
    boundaries += [(1.0, 0.0, 0.0), (0.0, 1.0, 0.0)]

    vertices = []
    for (a1, b1, r1), (a2, b2, r2) in itertools.combinations(boundaries, 2):
        matrix = np.array([[a1, b1], [a2, b2]])
        if abs(np.linalg.det(matrix)) < TOL:
            continue
        x, y = np.linalg.solve(matrix, np.array([r1, r2]))
        point = (round(float(x) + 0.0, 9), round(float(y) + 0.0, 9))
        if point not in vertices and problem.is_feasible(point, tol=TOL):
            vertices.append(point)

    if len(vertices) > 2:
        cx = sum(p[0] for p in vertices) / len(vertices)
        cy = sum(p[1] for p in vertices) / len(vertices)
        vertices.sort(key=lambda p: math.atan2(p[1] - cy, p[0] - cx))
    return vertices


def generate_graph_data(problem, solution=None):
    """Lines, feasible region and objective line for a 2-variable problem, else None"""
    if problem is None or problem.num_decision_vars != 2:
        return None

    optimum = None
    if solution is not None and solution.is_optimal:
        optimum = tuple(solution.decision_values)

    vertices = feasible_vertices(problem)

    # Widen the default window so intercepts, corners and the optimum stay visible
    xs, ys = [0.0], [0.0]
    for constraint in problem.constraints:
        a, b = constraint.coeffs
        if abs(a) > TOL and constraint.rhs / a > 0:
            xs.append(constraint.rhs / a)
        if abs(b) > TOL and constraint.rhs / b > 0:
            ys.append(constraint.rhs / b)
    xs += [p[0] for p in vertices]
    ys += [p[1] for p in vertices]
    if optimum is not None:
        xs.append(optimum[0])
        ys.append(optimum[1])
    x_max = max(DEFAULT_RANGE, 1.1 * max(xs))
    y_max = max(DEFAULT_RANGE, 1.1 * max(ys))

    constraint_lines = []
    for index, constraint in enumerate(problem.constraints):
        a, b = constraint.coeffs
        constraint_lines.append({
            'id': f'constraint-{index + 1}',
            'name': f'Constraint {index + 1}',
            'data': _segment_in_box(a, b, constraint.rhs, x_max, y_max),
            'constraint': constraint,
        })

    feasible_region = []
    for x, y in vertices:
        is_optimal = (optimum is not None
                      and abs(x - optimum[0]) < 1e-6 and abs(y - optimum[1]) < 1e-6)
        feasible_region.append({'x': x, 'y': y, 'is_optimal': is_optimal})

    c1, c2 = problem.objective_coeffs
    objective_line = {
        'slope': -c1 / c2 if c2 != 0 else None,
        'intercept': solution.objective_value / c2 if optimum is not None and c2 != 0 else None,
        'objective': problem.objective_coeffs,
    }

    return GraphData((0.0, x_max), (0.0, y_max), constraint_lines, feasible_region, objective_line)


def plot_graph(graph_data, title=None):
    """Draw graph data with matplotlib and return the figure"""
    fig, ax = plt.subplots(figsize=(8, 6))
    colors = ['red', 'blue', 'green', 'orange', 'purple', 'brown']

    for i, line in enumerate(graph_data.constraint_lines):
        points = line['data']
        if len(points) < 2:
            continue
        constraint = line['constraint']
        a, b = constraint.coeffs
        ax.plot([p['x'] for p in points], [p['y'] for p in points], color=colors[i % len(colors)],
                linewidth=2, label=f"{a:g}x₁ + {b:g}x₂ {constraint.operator} {constraint.rhs:g}")

    region = graph_data.feasible_region
    if len(region) > 2:
        ax.fill([p['x'] for p in region], [p['y'] for p in region],
                color='lightblue', alpha=0.4, label='Feasible Region')

    objective = graph_data.objective_line
    x_min, x_max = graph_data.x_range
    if objective and objective['intercept'] is not None:
        x_line = np.linspace(x_min, x_max, 100)
        ax.plot(x_line, objective['slope'] * x_line + objective['intercept'], 'k--',
                linewidth=1.5, label='Objective at optimum')

    for point in region:
        if point['is_optimal']:
            ax.scatter(point['x'], point['y'], c='gold', marker='*', s=200,
                       edgecolors='black', zorder=5, label=f"Optimal: ({point['x']:.2f}, {point['y']:.2f})")
        else:
            ax.scatter(point['x'], point['y'], c='red', s=40, zorder=4)

    ax.set_xlim(*graph_data.x_range)
    ax.set_ylim(*graph_data.y_range)
    ax.set_xlabel(graph_data.variable_labels[0], fontsize=12, fontweight='bold')
    ax.set_ylabel(graph_data.variable_labels[1], fontsize=12, fontweight='bold')
    ax.grid(True, alpha=0.3)
    ax.legend(loc='upper right')
    if title:
        ax.set_title(title, fontsize=14, fontweight='bold')
    fig.tight_layout()
    return fig
