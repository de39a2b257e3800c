from .model import MAXIMIZE


def extract_solution(tableau):
    """
    Read variable values and the objective value off a final tableau.

    Returns (decision_values, slack_values, objective_value). Variables that
    label no row are non-basic and stay at 0. The Z-row RHS holds the
    objective of the maximization form, so a minimization's optimum is its
    negation. Whenever the optimum is non-negative this is the same as
    abs() of the Z-row RHS; a negative minimum keeps its sign.
    """
    n = tableau.num_decision_vars
    decision_values = [0.0] * n
    slack_values = [0.0] * tableau.num_slack_vars

    for label, value in zip(tableau.row_labels, tableau.rhs):
        index = tableau.column_labels.index(label)
        if index < n:
            decision_values[index] = float(value)
        else:
            slack_values[index - n] = float(value)

    z_value = float(tableau.z_row[-1])
    objective_value = z_value if tableau.direction == MAXIMIZE else -z_value
    return decision_values, slack_values, objective_value + 0.0
