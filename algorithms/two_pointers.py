"""
two_pointers.py — Two Pointers (pair with target sum)
======================================================
Generator-based replay of the two-ended scan over a sorted array:
  1. left at 0, right at the end
  2. Each step compares arr[left] + arr[right] with the target and
     moves exactly one pointer inward (or stops on a match)
  3. Final step  →  report the pair, or [-1, -1]

The step budget is ceil(n / 2) comparisons.  Once the pair is found or
the pointers meet, remaining budgeted steps hold the last position.
If the budget runs out first the run completes as "not found".
"""

from typing import Dict, Generator, List, Tuple

from algorithms.state import Algorithm, Phase, SimulationState, StateBuilder


NOT_FOUND = (-1, -1)


# ---------------------------------------------------------------------------
# Source — each string is one displayed line; index = highlighted line
# ---------------------------------------------------------------------------
SOURCE: List[str] = [
    "def pair_with_target_sum(arr, target):",    # 0
    "    left = 0",                              # 1
    "    right = len(arr) - 1",                  # 2
    "",                                          # 3
    "    while left < right:",                   # 4
    "        current_sum = arr[left] + arr[right]",  # 5
    "",                                          # 6
    "        if current_sum == target:",         # 7
    "            return [left, right]",          # 8
    "",                                          # 9
    "        if current_sum < target:",          # 10
    "            left += 1",                     # 11
    "        else:",                             # 12
    "            right -= 1",                    # 13
    "",                                          # 14
    "    return [-1, -1]  # no pair found",      # 15
]

LINES: Dict[str, Tuple[int, ...]] = {
    "init":      (1, 2),
    "found":     (5, 7, 8),
    "less":      (5, 10, 11),
    "greater":   (5, 12, 13),
    "met":       (4,),
    "return":    (8,),
    "not_found": (15,),
}

DEFAULT_INPUT  = [1, 2, 3, 4, 6]
DEFAULT_TARGET = 6

EXAMPLES = [
    {
        "id": "pair-with-target-sum",
        "name": "Pair with Target Sum",
        "description": "Find a pair of elements that sum to a target value",
        "data": [1, 2, 3, 4, 6],
    },
    {
        "id": "remove-duplicates",
        "name": "Remove Duplicates",
        "description": "Remove duplicates from a sorted array",
        "data": [2, 3, 3, 3, 6, 9, 9],
    },
]


def comparison_budget(n: int) -> int:
    return (n + 1) // 2


def total_steps(n: int) -> int:
    """init + ceil(n / 2) comparisons + final."""
    return 1 + comparison_budget(n) + 1


# ---------------------------------------------------------------------------
# Generator
# ---------------------------------------------------------------------------
def two_pointers(
    data: Tuple[int, ...],
    target: int = DEFAULT_TARGET,
) -> Generator[SimulationState, None, None]:
    """Yields one SimulationState per step, 0 .. total_steps(len(data)) - 1."""

    n           = len(data)
    budget      = comparison_budget(n)
    sb          = StateBuilder(Algorithm.TWO_POINTERS, data, target, total_steps(n))
    left, right = 0, n - 1

    # --- initialisation ---
    sb.move(left=left, right=right)
    sb.lines     = LINES["init"]
    sb.message   = (
        f"Place left at index 0 and right at index {right}. "
        f"Looking for two values that sum to {target}."
    )
    sb.variables = {"left": left, "right": right, "target": target}
    yield sb.build(0)

    # --- main loop ---
    for step in range(1, budget + 1):
        sb.next_step()

        if sb.phase is Phase.COMPLETE:
            if sb.found:
                sb.highlight(left, right)
                sb.lines   = LINES["return"]
                sb.message = f"Pair already found at indices ({left}, {right})."
            else:
                sb.lines   = LINES["met"]
                sb.message = "Pointers have met; nothing left to compare."
            sb.variables = {"left": left, "right": right}

        elif left >= right:
            sb.complete(NOT_FOUND, found=False)
            sb.lines     = LINES["met"]
            sb.message   = (
                f"left ({left}) is no longer below right ({right}): "
                f"no pair sums to {target}."
            )
            sb.variables = {"left": left, "right": right}

        else:
            sb.enter(Phase.ITERATING)
            current_sum = data[left] + data[right]
            sb.highlight(left, right)
            sb.variables = {
                "left": left,
                "right": right,
                "current_sum": current_sum,
                "target": target,
            }
            compared = f"arr[{left}] + arr[{right}] = {data[left]} + {data[right]} = {current_sum}"

            if current_sum == target:
                sb.complete((left, right), found=True)
                sb.lines   = LINES["found"]
                sb.message = f"{compared} equals the target. Pair found at ({left}, {right})."
            elif current_sum < target:
                left += 1
                sb.lines   = LINES["less"]
                sb.message = f"{compared} is less than {target}: move left to {left}."
            else:
                right -= 1
                sb.lines   = LINES["greater"]
                sb.message = f"{compared} is greater than {target}: move right to {right}."
            sb.move(left=left, right=right)

        yield sb.build(step)

    # --- final ---
    sb.next_step()
    if sb.found:
        sb.highlight(left, right)
        sb.lines   = LINES["return"]
        sb.message = (
            f"Return [{left}, {right}]: {data[left]} + {data[right]} = {target}."
        )
    else:
        exhausted = left < right
        sb.complete(NOT_FOUND, found=False)
        sb.lines   = LINES["not_found"]
        sb.message = (
            "Step budget exhausted before the pointers met. Return [-1, -1]."
            if exhausted else
            "No pair found. Return [-1, -1]."
        )
    sb.variables = {"result": list(sb.result)}
    yield sb.build(budget + 1)
