"""
binary_search.py — Binary Search
=================================
Generator-based replay of iterative binary search.  Each iteration step
computes mid from the current bounds, compares arr[mid] with the target
and halves the search range.  The budget of ceil(log2 n) + 1 iterations
always covers the worst case, so the final step reports the true answer.

The input is assumed sorted ascending.  Nothing here checks that; on
unsorted input the pointer moves are still well defined but the answer
is meaningless.
"""

from typing import Dict, Generator, List, Tuple

from algorithms.state import Algorithm, Phase, SimulationState, StateBuilder


NOT_FOUND = -1


# ---------------------------------------------------------------------------
# Source — each string is one displayed line; index = highlighted line
# ---------------------------------------------------------------------------
SOURCE: List[str] = [
    "def binary_search(arr, target):",             # 0
    "    left = 0",                                # 1
    "    right = len(arr) - 1",                    # 2
    "",                                            # 3
    "    while left <= right:",                    # 4
    "        mid = (left + right) // 2",           # 5
    "",                                            # 6
    "        if arr[mid] == target:",              # 7
    "            return mid  # target found",      # 8
    "",                                            # 9
    "        if arr[mid] < target:",               # 10
    "            left = mid + 1  # search the right half",  # 11
    "        else:",                               # 12
    "            right = mid - 1  # search the left half",  # 13
    "",                                            # 14
    "    return -1  # target not found",           # 15
]

LINES: Dict[str, Tuple[int, ...]] = {
    "init":      (1, 2),
    "found":     (5, 7, 8),
    "less":      (5, 10, 11),
    "greater":   (5, 12, 13),
    "empty":     (4,),
    "return":    (8,),
    "not_found": (15,),
}

DEFAULT_INPUT  = [1, 2, 3, 4, 5, 6, 7, 8, 9]
DEFAULT_TARGET = 5

EXAMPLES = [
    {
        "id": "basic-binary-search",
        "name": "Basic Binary Search",
        "description": "Find a target value in a sorted array",
        "data": [1, 2, 3, 4, 5, 6, 7, 8, 9],
    },
    {
        "id": "rotated-array-search",
        "name": "Rotated Array Search",
        "description": "Find a target value in a rotated sorted array",
        "data": [4, 5, 6, 7, 0, 1, 2],
    },
]


def iteration_budget(n: int) -> int:
    # (n - 1).bit_length() == ceil(log2(n)) for n >= 1, without float rounding
    return (n - 1).bit_length() + 1


def total_steps(n: int) -> int:
    """init + ceil(log2 n) + 1 iterations + final."""
    return 1 + iteration_budget(n) + 1


# ---------------------------------------------------------------------------
# Generator
# ---------------------------------------------------------------------------
def binary_search(
    data: Tuple[int, ...],
    target: int = DEFAULT_TARGET,
) -> Generator[SimulationState, None, None]:
    """Yields one SimulationState per step, 0 .. total_steps(len(data)) - 1."""

    n           = len(data)
    budget      = iteration_budget(n)
    sb          = StateBuilder(Algorithm.BINARY_SEARCH, data, target, total_steps(n))
    left, right = 0, n - 1
    mid         = (left + right) // 2

    # --- initialisation ---
    sb.move(left=left, right=right, mid=mid)
    sb.lines     = LINES["init"]
    sb.message   = f"Search for {target} between index 0 and index {right}."
    sb.variables = {"left": left, "right": right, "target": target}
    yield sb.build(0)

    # --- main loop ---
    for step in range(1, budget + 1):
        sb.next_step()

        if sb.phase is Phase.COMPLETE:
            if sb.found:
                sb.highlight(mid)
                sb.lines   = LINES["return"]
                sb.message = f"Target already found at index {mid}."
            else:
                sb.lines   = LINES["empty"]
                sb.message = "Search range is empty."
            sb.variables = {"left": left, "right": right, "mid": mid}

        elif left > right:
            sb.complete(NOT_FOUND, found=False)
            sb.lines     = LINES["empty"]
            sb.message   = f"left ({left}) passed right ({right}): {target} is not in the array."
            sb.variables = {"left": left, "right": right}

        else:
            sb.enter(Phase.ITERATING)
            mid = (left + right) // 2
            sb.highlight(mid)
            sb.variables = {
                "left": left,
                "right": right,
                "mid": mid,
                "arr[mid]": data[mid],
                "target": target,
            }
            compared = f"mid = ({left} + {right}) // 2 = {mid}, arr[{mid}] = {data[mid]}"

            if data[mid] == target:
                sb.complete(mid, found=True)
                sb.lines   = LINES["found"]
                sb.message = f"{compared} equals the target. Found at index {mid}."
            elif data[mid] < target:
                left = mid + 1
                sb.lines   = LINES["less"]
                sb.message = f"{compared} is less than {target}: search the right half, left = {left}."
            else:
                right = mid - 1
                sb.lines   = LINES["greater"]
                sb.message = f"{compared} is greater than {target}: search the left half, right = {right}."
            sb.move(left=left, right=right, mid=mid)

        yield sb.build(step)

    # --- final ---
    sb.next_step()
    if sb.found:
        sb.highlight(mid)
        sb.lines   = LINES["return"]
        sb.message = f"Return {mid}: arr[{mid}] = {target}."
    else:
        sb.complete(NOT_FOUND, found=False)
        sb.lines   = LINES["not_found"]
        sb.message = f"{target} is not in the array. Return -1."
    sb.variables = {"result": sb.result}
    yield sb.build(budget + 1)
