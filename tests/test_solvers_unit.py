"""Tests for the three elimination strategies and their shared contract."""

import dataclasses
import json

import numpy as np
import pytest

from linsolve import (
    GaussianEliminationSolver,
    GaussJordanSolver,
    InverseMatrixSolver,
    SolutionStatus,
    StepKind,
    classify,
)

ALL_SOLVERS = [GaussianEliminationSolver(), GaussJordanSolver(), InverseMatrixSolver()]
ELIMINATION_SOLVERS = [GaussianEliminationSolver(), GaussJordanSolver()]


def _ids(solver):
    return solver.name


# ── Unique solutions ────────────────────────────────────────────────────

@pytest.mark.parametrize("solver", ALL_SOLVERS, ids=_ids)
class TestUniqueSolution:
    def test_simple_two_by_two(self, solver, simple_system):
        result = solver.solve(simple_system)
        assert result.status is SolutionStatus.UNIQUE_SOLUTION
        assert result.solution == pytest.approx((0.8, 1.4), abs=1e-12)
        assert result.max_error == pytest.approx(0.0, abs=1e-12)
        assert result.error_message is None
        assert result.method == solver.name

    def test_three_by_three(self, solver, three_by_three):
        result = solver.solve(three_by_three)
        assert result.is_unique
        assert result.solution == pytest.approx((2.0, 3.0, -1.0), abs=1e-10)
        assert result.accuracy == "high"

    @pytest.mark.parametrize("n", [2, 5, 10])
    def test_identity_returns_rhs(self, solver, n):
        rhs = np.arange(1.0, n + 1.0) * -1.5
        matrix = np.hstack([np.eye(n), rhs.reshape(-1, 1)])
        result = solver.solve(matrix)
        assert result.solution == pytest.approx(tuple(rhs), abs=1e-12)
        assert result.max_error == pytest.approx(0.0, abs=1e-12)

    def test_needs_row_swaps(self, solver):
        # x + 2y = 5, 3x + 4y = 11
        result = solver.solve([[1.0, 2.0, 5.0], [3.0, 4.0, 11.0]])
        assert result.solution == pytest.approx((1.0, 2.0), abs=1e-12)

    def test_zero_on_diagonal(self, solver):
        # y = 2, x = 3
        result = solver.solve([[0.0, 1.0, 2.0], [1.0, 0.0, 3.0]])
        assert result.solution == pytest.approx((3.0, 2.0), abs=1e-12)

    def test_input_is_not_mutated(self, solver, three_by_three):
        before = three_by_three.copy()
        solver.solve(three_by_three, trace=True)
        np.testing.assert_array_equal(three_by_three, before)

    def test_accepts_nested_lists(self, solver):
        rows = [[2, 1, 3], [1, 3, 5]]
        result = solver.solve(rows)
        assert result.solution == pytest.approx((0.8, 1.4), abs=1e-12)
        assert rows == [[2, 1, 3], [1, 3, 5]]

    def test_solution_is_plain_floats(self, solver, simple_system):
        result = solver.solve(simple_system)
        assert isinstance(result.solution, tuple)
        assert all(type(v) is float for v in result.solution)

    def test_result_is_immutable(self, solver, simple_system):
        result = solver.solve(simple_system)
        with pytest.raises(dataclasses.FrozenInstanceError):
            result.status = SolutionStatus.ERROR


@pytest.mark.parametrize("seed", range(6))
@pytest.mark.parametrize("n", [3, 6, 10])
def test_methods_agree_on_well_conditioned_systems(seed, n, make_system):
    matrix = make_system(n, seed)
    results = [solver.solve(matrix) for solver in ALL_SOLVERS]
    reference = np.linalg.solve(matrix[:, :n], matrix[:, n])

    for result in results:
        assert result.is_unique
        assert result.max_error < 1e-6
        np.testing.assert_allclose(result.solution, reference, atol=1e-6)
    for other in results[1:]:
        np.testing.assert_allclose(other.solution, results[0].solution, atol=1e-6)


# ── Systems without a unique solution ───────────────────────────────────

@pytest.mark.parametrize("solver", ELIMINATION_SOLVERS, ids=_ids)
class TestClassificationShortCircuit:
    def test_infinite_solutions(self, solver):
        result = solver.solve([[1.0, 1.0, 2.0], [1.0, 1.0, 2.0]])
        assert result.status is SolutionStatus.INFINITE_SOLUTIONS
        assert result.solution is None
        assert result.max_error is None

    def test_no_solution(self, solver):
        result = solver.solve([[1.0, 1.0, 2.0], [1.0, 1.0, 3.0]])
        assert result.status is SolutionStatus.NO_SOLUTION
        assert result.solution is None

    def test_zero_matrix_has_no_solution(self, solver):
        result = solver.solve([[0.0, 0.0, 1.0], [0.0, 0.0, 1.0]])
        assert result.status is SolutionStatus.NO_SOLUTION

    def test_no_elimination_steps_recorded(self, solver):
        result = solver.solve([[1.0, 1.0, 2.0], [1.0, 1.0, 2.0]], trace=True)
        assert result.trace.kinds() == [StepKind.SYSTEM_LOADED, StepKind.CLASSIFIED]


class TestInverseMethodOnSingularMatrices:
    def test_zero_matrix_is_an_error(self):
        result = InverseMatrixSolver().solve([[0.0, 0.0, 1.0], [0.0, 0.0, 1.0]])
        assert result.status is SolutionStatus.ERROR
        assert result.determinant == 0.0
        assert "singular" in result.error_message
        assert result.classification is SolutionStatus.NO_SOLUTION
        assert result.solution is None

    def test_dependent_rows_keep_classifier_verdict(self):
        result = InverseMatrixSolver().solve([[1.0, 1.0, 2.0], [1.0, 1.0, 2.0]])
        assert result.status is SolutionStatus.ERROR
        assert result.classification is SolutionStatus.INFINITE_SOLUTIONS

    def test_error_trace_ends_with_failure(self):
        result = InverseMatrixSolver().solve([[0.0, 0.0, 1.0], [0.0, 0.0, 1.0]], trace=True)
        kinds = result.trace.kinds()
        assert kinds[:2] == [StepKind.SYSTEM_LOADED, StepKind.CLASSIFIED]
        assert StepKind.DETERMINANT in kinds
        assert kinds[-1] is StepKind.FAILED

    def test_determinant_reported_on_success(self, simple_system):
        result = InverseMatrixSolver().solve(simple_system)
        assert result.determinant == pytest.approx(5.0)

    def test_tiny_but_regular_matrix(self):
        # Every entry clears the zero tolerance, so the rank check calls the
        # system regular, but det = 1e-14 is below it. Elimination still
        # solves it; the inverse method refuses.
        matrix = [[1e-7, 0.0, 1e-7], [0.0, 1e-7, 1e-7]]
        assert GaussianEliminationSolver().solve(matrix).solution == pytest.approx((1.0, 1.0))
        result = InverseMatrixSolver().solve(matrix)
        assert result.status is SolutionStatus.ERROR
        assert result.classification is SolutionStatus.UNIQUE_SOLUTION


@pytest.mark.parametrize("solver", ELIMINATION_SOLVERS, ids=_ids)
def test_zero_pivot_after_regular_classification(solver):
    # The first-nonzero rank scan keeps a 1e-10 remainder in column 2; the
    # largest-pivot elimination leaves about 1e-13 there instead.
    matrix = [[1e-3, 1.0, 1.0], [1.0, 1000.0 + 1e-10, 2.0]]
    assert classify(matrix) is SolutionStatus.UNIQUE_SOLUTION

    result = solver.solve(matrix, trace=True)
    assert result.status is SolutionStatus.ERROR
    assert result.error_message == "Zero pivot in column 2."
    assert result.solution is None
    assert result.trace.kinds()[-1] is StepKind.FAILED


def test_elimination_methods_do_not_report_determinant(simple_system):
    for solver in ELIMINATION_SOLVERS:
        assert solver.solve(simple_system).determinant is None


# ── Failures at the solver boundary ─────────────────────────────────────

@pytest.mark.parametrize("solver", ALL_SOLVERS, ids=_ids)
class TestErrorResults:
    def test_wrong_shape(self, solver):
        result = solver.solve([[1.0, 2.0], [3.0, 4.0]])
        assert result.status is SolutionStatus.ERROR
        assert "n x (n+1)" in result.error_message

    def test_ragged_rows(self, solver):
        result = solver.solve([[1.0, 2.0, 3.0], [4.0, 5.0]])
        assert result.status is SolutionStatus.ERROR
        assert result.error_message

    def test_non_finite_input(self, solver):
        result = solver.solve([[1.0, 0.0, np.inf], [0.0, 1.0, 1.0]])
        assert result.status is SolutionStatus.ERROR
        assert "non-finite" in result.error_message

    def test_overflow_is_reported_not_raised(self, solver):
        result = solver.solve([[1e-10, 0.0, 1e300], [0.0, 1e-10, 1e300]], trace=True)
        assert result.status is SolutionStatus.ERROR
        assert result.solution is None
        assert result.trace.kinds()[-1] is StepKind.FAILED

    def test_trace_present_even_on_error(self, solver):
        result = solver.solve([[1.0, 2.0], [3.0, 4.0]], trace=True)
        assert result.trace is not None
        assert result.trace.kinds() == [StepKind.FAILED]


# ── Traces ──────────────────────────────────────────────────────────────

class TestTraces:
    def test_no_trace_unless_requested(self, simple_system):
        for solver in ALL_SOLVERS:
            assert solver.solve(simple_system).trace is None

    def test_gauss_step_sequence(self, simple_system):
        result = GaussianEliminationSolver().solve(simple_system, trace=True)
        assert result.trace.kinds() == [
            StepKind.SYSTEM_LOADED,
            StepKind.CLASSIFIED,
            StepKind.PIVOT_SELECTED,
            StepKind.ROW_NORMALIZED,
            StepKind.ROW_ELIMINATED,
            StepKind.PIVOT_SELECTED,
            StepKind.ROW_NORMALIZED,
            StepKind.BACK_SUBSTITUTED,
            StepKind.BACK_SUBSTITUTED,
            StepKind.RESIDUAL_CHECKED,
            StepKind.RESIDUAL_CHECKED,
            StepKind.SOLUTION_EXTRACTED,
        ]

    def test_gauss_records_exact_factors(self, simple_system):
        trace = GaussianEliminationSolver().solve(simple_system, trace=True).trace
        first_pivot = trace.of_kind(StepKind.PIVOT_SELECTED)[0]
        assert first_pivot.details == {"column": 0, "row": 0, "value": 2.0}
        elimination = trace.of_kind(StepKind.ROW_ELIMINATED)[0]
        assert elimination.details == {"target": 1, "source": 0, "factor": 1.0}
        assert elimination.matrix == ((1.0, 0.5, 1.5), (0.0, 2.5, 3.5))
        last = trace.of_kind(StepKind.BACK_SUBSTITUTED)[-1]
        assert last.details["index"] == 0
        assert last.details["value"] == pytest.approx(0.8)

    def test_swap_is_recorded(self):
        trace = GaussianEliminationSolver().solve(
            [[1.0, 2.0, 5.0], [3.0, 4.0, 11.0]], trace=True).trace
        (swap,) = trace.of_kind(StepKind.ROWS_SWAPPED)
        assert swap.details == {"first": 0, "second": 1}
        assert swap.matrix[0] == (3.0, 4.0, 11.0)

    def test_gauss_only_eliminates_below(self, three_by_three):
        trace = GaussianEliminationSolver().solve(three_by_three, trace=True).trace
        for step in trace.of_kind(StepKind.ROW_ELIMINATED):
            assert step.details["target"] > step.details["source"]

    def test_gauss_jordan_eliminates_above_too(self, three_by_three):
        trace = GaussJordanSolver().solve(three_by_three, trace=True).trace
        steps = trace.of_kind(StepKind.ROW_ELIMINATED)
        assert any(s.details["target"] < s.details["source"] for s in steps)
        assert StepKind.BACK_SUBSTITUTED not in trace.kinds()
        # The last snapshot is [I | x].
        final = np.array(steps[-1].matrix)
        np.testing.assert_allclose(final[:, :3], np.eye(3), atol=1e-12)

    def test_inverse_method_steps(self, simple_system):
        trace = InverseMatrixSolver().solve(simple_system, trace=True).trace
        kinds = trace.kinds()
        assert kinds.index(StepKind.DETERMINANT) < kinds.index(StepKind.INVERSE_COMPUTED)
        assert kinds.count(StepKind.PRODUCT_COMPUTED) == 2
        (inv,) = trace.of_kind(StepKind.INVERSE_COMPUTED)
        np.testing.assert_allclose(inv.matrix, [[0.6, -0.2], [-0.2, 0.4]], atol=1e-12)

    def test_residual_breakdown(self, three_by_three):
        trace = GaussJordanSolver().solve(three_by_three, trace=True).trace
        checks = trace.of_kind(StepKind.RESIDUAL_CHECKED)
        assert [c.details["row"] for c in checks] == [0, 1, 2]
        assert checks[1].details["rhs"] == -11.0
        assert checks[1].details["lhs"] == pytest.approx(-11.0)

    def test_trace_is_sealed(self, simple_system):
        trace = GaussianEliminationSolver().solve(simple_system, trace=True).trace
        assert trace.sealed
        with pytest.raises(RuntimeError):
            trace.record(StepKind.FAILED, message="late")

    def test_to_dict_is_json_ready(self, simple_system):
        result = InverseMatrixSolver().solve(simple_system, trace=True)
        data = json.loads(json.dumps(result.to_dict()))
        assert data["status"] == "unique"
        assert data["accuracy"] == "high"
        assert data["steps"][0]["kind"] == "system-loaded"
