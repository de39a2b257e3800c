import pandas as pd

from .model import Status, Z_LABEL, decision_name
from .parsing import to_fraction_string

STATUS_MESSAGES = {
    Status.OPTIMAL: "Optimal solution found.",
    Status.UNBOUNDED: "Unbounded solution: the objective can be improved indefinitely without violating the constraints.",
    Status.INVALID_PROBLEM: "The problem cannot be solved by this method: every constraint must be '<=' with a non-negative right-hand side.",
    Status.NUMERIC_INSTABILITY: "Numerical instability: a pivot element was too close to zero.",
    Status.ITERATION_LIMIT_EXCEEDED: "Iteration limit reached: the solver gave up before reaching optimality (possible cycling).",
    Status.CANCELLED: "The solve was cancelled.",
}


def status_message(status):
    return STATUS_MESSAGES[Status(status)]


def format_value(value):
    return f"{value:.4f}"


def tableau_to_dataframe(tableau, formatter=format_value):
    """Tableau as a DataFrame with a 'Basic Var' column and the Z-row last"""
    headers = ["Basic Var"] + list(tableau.column_labels)
    data = []
    for row in tableau.rows:
        data.append([row.label] + [formatter(cell.value) for cell in row.cells])
    return pd.DataFrame(data, columns=headers)


def pivot_mask(tableau):
    """Boolean DataFrame matching tableau_to_dataframe, True on the pivot cell"""
    df = tableau_to_dataframe(tableau)
    mask = pd.DataFrame(False, index=df.index, columns=df.columns)
    if tableau.pivot is not None:
        row, column = tableau.pivot
        mask.iloc[row, column + 1] = True
    return mask


def pivot_description(record):
    if record.choice is None:
        return "Final tableau"
    return (f"Entering: {record.entering_label}, leaving: {record.leaving_label}, "
            f"pivot element: {to_fraction_string(record.choice.pivot_value)}")


def _linear_terms(coeffs):
    terms = []
    for i, coeff in enumerate(coeffs):
        if abs(coeff) > 1e-10:
            if not terms:
                if coeff < 0:
                    terms.append(f"- {abs(coeff):g}{decision_name(i)}")
                else:
                    terms.append(f"{coeff:g}{decision_name(i)}")
            else:
                sign = "+" if coeff >= 0 else "-"
                terms.append(f"{sign} {abs(coeff):g}{decision_name(i)}")
    return " ".join(terms) if terms else "0"


def format_objective(problem):
    return f"{problem.direction.upper()} {Z_LABEL} = {_linear_terms(problem.objective_coeffs)}"


def format_constraint(constraint):
    return f"{_linear_terms(constraint.coeffs)} {constraint.operator} {constraint.rhs:g}"
