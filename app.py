import logging

import numpy as np
import pandas as pd
import streamlit as st

from simplex_tableau import (LESS_EQUAL, MAXIMIZE, MINIMIZE, Constraint, EngineConfig,
                             InvalidProblem, LPProblem, SimplexEngine, Status, normalize_problem)
from simplex_tableau.display import (format_constraint, format_objective, pivot_description,
                                     pivot_mask, status_message, tableau_to_dataframe)
from simplex_tableau.graph import generate_graph_data, get_visualization_options, plot_graph
from simplex_tableau.parsing import parse_coefficients, parse_fraction, to_fraction_string

logging.basicConfig(level=logging.INFO)

# Page configuration
st.set_page_config(
    page_title="Simplex Method Solver",
    page_icon="📊",
    layout="wide",
    initial_sidebar_state="expanded"
)

# Custom CSS for styling
st.markdown("""
<style>
    .main-header {
        font-size: 3rem;
        color: #1f77b4;
        text-align: center;
        margin-bottom: 2rem;
        font-weight: bold;
    }
    .sub-header {
        font-size: 1.5rem;
        color: #2e86ab;
        margin-bottom: 1rem;
        font-weight: bold;
    }
    .warning-box {
        background-color: #fff3cd;
        padding: 1rem;
        border-radius: 0.5rem;
        border-left: 4px solid #ffc107;
        margin: 1rem 0;
    }
    .error-box {
        background-color: #f8d7da;
        padding: 1rem;
        border-radius: 0.5rem;
        border-left: 4px solid #dc3545;
        margin: 1rem 0;
    }
    .solution-box {
        background-color: #e7f3ff;
        padding: 1.5rem;
        border-radius: 0.5rem;
        border: 2px solid #1f77b4;
        margin: 1rem 0;
    }
</style>
""", unsafe_allow_html=True)


def load_engine_config():
    """Solver settings from the [solver] section of .streamlit/secrets.toml, if any"""
    try:
        settings = st.secrets.get("solver", {})
    except FileNotFoundError:
        settings = {}
    return EngineConfig.from_mapping(dict(settings))


def display_problem_formulation(problem):
    """Display the problem formulation in a nice format"""
    st.markdown("---")
    st.markdown('<div class="sub-header">📝 Problem Formulation</div>', unsafe_allow_html=True)
    st.write(f"**Objective:** {format_objective(problem)}")
    st.write("**Subject to:**")
    for constraint in problem.constraints:
        st.write(format_constraint(constraint))
    st.write(", ".join(f"x{j + 1}" for j in range(problem.num_decision_vars)) + " ≥ 0")


def display_tableau(tableau, as_fractions):
    """Display a simplex tableau, highlighting the pivot cell"""
    formatter = to_fraction_string if as_fractions else (lambda v: f"{v:.4f}")
    df = tableau_to_dataframe(tableau, formatter)
    mask = pivot_mask(tableau)
    css = pd.DataFrame(np.where(mask, 'background-color: #ffd54f; font-weight: bold', ''),
                       index=mask.index, columns=mask.columns)
    styled = df.style.apply(lambda _: css, axis=None)
    st.dataframe(styled, use_container_width=True, hide_index=True)


def display_history(solution, as_fractions):
    st.markdown("### 📊 Solution Steps")
    for i, record in enumerate(solution.history):
        with st.expander(f"Iteration {i}", expanded=i == len(solution.history) - 1):
            st.write(f"**{pivot_description(record)}**")
            display_tableau(record.tableau, as_fractions)


def display_solution(solution):
    """Display the final solution"""
    st.markdown('<div class="solution-box">', unsafe_allow_html=True)
    st.markdown("### ✅ Optimal Solution Found!")

    st.write("**Decision Variables:**")
    cols = st.columns(4)
    for i, value in enumerate(solution.decision_values):
        with cols[i % 4]:
            st.metric(f"x{i + 1}", f"{value:.4f}")

    if solution.slack_values:
        st.write("**Slack Variables:**")
        cols = st.columns(4)
        for i, value in enumerate(solution.slack_values):
            with cols[i % 4]:
                st.metric(f"s{i + 1}", f"{value:.4f}")

    st.metric("**Optimal Objective Value (Z)**", f"{solution.objective_value:.4f}")
    st.markdown('</div>', unsafe_allow_html=True)


def display_graph(problem, solution):
    option_ids = [option['id'] for option in get_visualization_options(problem)]
    if '2d' not in option_ids:
        st.info("The graphical view is only available for problems with 2 decision variables.")
        return
    graph_data = generate_graph_data(problem, solution)
    st.markdown("### 📈 Graphical Solution")
    st.pyplot(plot_graph(graph_data, format_objective(problem)))


def read_problem(num_vars, obj_type, obj_input, constraints, constraint_types, rhs_values):
    """Turn the raw form values into an LPProblem, rewriting '>=' rows where possible"""
    objective = parse_coefficients(obj_input, num_vars)
    parsed = []
    for i, (coeff_input, operator, rhs_input) in enumerate(zip(constraints, constraint_types, rhs_values)):
        rhs = parse_fraction(rhs_input)
        if rhs is None:
            raise ValueError(f"Constraint {i + 1}: invalid right-hand side '{rhs_input}'")
        parsed.append(Constraint(parse_coefficients(coeff_input, num_vars), operator, rhs))

    direction = MAXIMIZE if obj_type == "max" else MINIMIZE
    problem = LPProblem(direction, num_vars, objective, parsed)
    if any(c.operator != LESS_EQUAL for c in parsed):
        problem = normalize_problem(problem)
        st.info("'>=' constraints with a non-positive RHS were multiplied by -1 to obtain '<=' form.")
    return problem


def main():
    # Header
    st.markdown('<div class="main-header">📊 Simplex Method Solver</div>', unsafe_allow_html=True)

    # Sidebar with instructions
    with st.sidebar:
        st.markdown("### 📖 Instructions")
        st.markdown("""
        **Objective Function:**
        - Enter coefficients for decision variables
        - Choose MAX or MIN

        **Constraints:**
        - Each row: coefficients, inequality, RHS
        - Coefficients may be numbers, fractions (`3/4`) or an expression
        - `<=` with a non-negative RHS is solved directly
        - `>=` is accepted only when its RHS is zero or negative (it is rewritten as `<=`)

        **Input Formats:**
        - **Space-separated**: `2 5 1/2`
        - **Mathematical expression**: `2x1 + 5x2 + x3`
        """)

        st.markdown("### ⚙️ Display")
        as_fractions = st.checkbox("Show tableau values as fractions", value=True)

        st.markdown("### ⚠️ Common Issues")
        st.markdown("""
        - Variable names must be `x1`, `x2`, etc.
        - Ensure RHS values are non-negative
        """)

    # Main content
    col1, col2 = st.columns([1, 1])

    with col1:
        st.markdown('<div class="sub-header">🔧 Problem Setup</div>', unsafe_allow_html=True)

        num_vars = st.number_input("Number of Decision Variables", min_value=1, max_value=10, value=2, step=1, key="num_vars")
        num_constraints = st.number_input("Number of Constraints", min_value=1, max_value=10, value=2, step=1, key="num_constraints")

        st.markdown("#### Objective Function")
        obj_type = st.radio("Optimization Type:", ["max", "min"], horizontal=True, key="obj_type")
        obj_input = st.text_input(
            f"Enter coefficients for x₁ to x{num_vars}:",
            value="3 2",
            help="Example: '3 2' or '3x1 + 2x2'",
            key="obj_input"
        )

        # Show parsing preview
        if obj_input:
            try:
                preview = LPProblem(MAXIMIZE if obj_type == "max" else MINIMIZE, num_vars,
                                    parse_coefficients(obj_input, num_vars))
                st.info(f"**Parsed as:** {format_objective(preview)}")
            except ValueError as e:
                st.caption(f"Not parsed yet: {e}")

    with col2:
        st.markdown('<div class="sub-header">📋 Constraints</div>', unsafe_allow_html=True)

        constraints = []
        constraint_types = []
        rhs_values = []

        for i in range(num_constraints):
            st.markdown(f"**Constraint {i + 1}**")
            col_a, col_b, col_c = st.columns([3, 1, 2])

            with col_a:
                coeff_input = st.text_input(
                    f"Coefficients {i + 1}",
                    value="1 1" if i == 0 else "1 0",
                    key=f"coeff_{i}",
                    label_visibility="collapsed",
                    help=f"Enter {num_vars} numbers separated by spaces, or an expression"
                )
            with col_b:
                inequality = st.selectbox("Inequality", ["<=", ">="], key=f"ineq_{i}",
                                          label_visibility="collapsed")
            with col_c:
                rhs = st.text_input("RHS", value="4" if i == 0 else "2", key=f"rhs_{i}",
                                    label_visibility="collapsed")

            constraints.append(coeff_input)
            constraint_types.append(inequality)
            rhs_values.append(rhs)

    if st.button("🚀 Solve", use_container_width=True, type="primary"):
        if not obj_input.strip():
            st.error("❌ Please enter the objective function coefficients.")
            return

        try:
            problem = read_problem(num_vars, obj_type, obj_input, constraints, constraint_types, rhs_values)
            config = load_engine_config()
        except (ValueError, InvalidProblem) as e:
            st.error(f"❌ {e}")
            return

        display_problem_formulation(problem)

        st.markdown("---")
        st.markdown('<div class="sub-header">🔄 Solution Process</div>', unsafe_allow_html=True)

        solution = SimplexEngine(problem, config).solve()

        if solution.status == Status.OPTIMAL:
            display_history(solution, as_fractions)
            display_solution(solution)
            display_graph(problem, solution)
        elif solution.status == Status.UNBOUNDED:
            st.markdown(f'<div class="warning-box">⚠️ {status_message(solution.status)}</div>', unsafe_allow_html=True)
            st.write(solution.message)
            display_history(solution, as_fractions)
        else:
            st.markdown(f'<div class="error-box">❌ {status_message(solution.status)}</div>', unsafe_allow_html=True)
            st.write(solution.message)
            if solution.history:
                display_history(solution, as_fractions)

    # Examples section
    with st.expander("📚 Example Problems", expanded=False):
        col1, col2 = st.columns(2)

        with col1:
            st.markdown("**Example 1: Maximization**")
            st.code("""
Maximize: Z = 3x1 + 2x2
Subject to:
  2x1 + x2 ≤ 18
  2x1 + 3x2 ≤ 42
  3x1 + x2 ≤ 24
  x1, x2 ≥ 0

Input (space-separated):
Objective: 3 2
Constraints:
  2 1 <= 18
  2 3 <= 42
  3 1 <= 24
            """)

        with col2:
            st.markdown("**Example 2: Minimization**")
            st.code("""
Minimize: Z = -2x1 - 3x2
Subject to:
  x1 + x2 ≤ 4
  x1 + 3x2 ≤ 6
  -x1 + x2 ≥ -2
  x1, x2 ≥ 0

Input (expression):
Objective: -2x1 - 3x2
Constraints:
  x1 + x2 <= 4
  x1 + 3x2 <= 6
  -x1 + x2 >= -2
            """)


if __name__ == "__main__":
    main()
