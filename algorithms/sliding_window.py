"""
sliding_window.py — Fixed-Size Sliding Window (maximum sum subarray)
=====================================================================
Generator-based replay of the classic "maximum sum of any contiguous
subarray of size k" solution.  Yields a SimulationState at every step:
  1. Initialise window_sum / max_sum
  2. Prime the first window, one element per step
  3. Snapshot max_sum after the first window
  4. Slide the window one cell right per step
  5. Final step  →  highlight the return and report max_sum

Step count is fixed up front by total_steps(n) so the playback bar
knows its length before anything runs.
"""

from typing import Dict, Generator, List, Tuple

from algorithms.state import Algorithm, Phase, SimulationState, StateBuilder


WINDOW_SIZE = 3


# ---------------------------------------------------------------------------
# Source — each string is one displayed line; index = highlighted line
# ---------------------------------------------------------------------------
SOURCE: List[str] = [
    "def max_sum_subarray(arr, k):",                        # 0
    "    max_sum = 0",                                      # 1
    "    window_sum = 0",                                   # 2
    "",                                                     # 3
    "    # sum of the first window",                        # 4
    "    for i in range(k):",                               # 5
    "        window_sum += arr[i]",                         # 6
    "",                                                     # 7
    "    max_sum = window_sum",                             # 8
    "",                                                     # 9
    "    # slide the window from left to right",            # 10
    "    for i in range(k, len(arr)):",                     # 11
    "        window_sum = window_sum - arr[i - k] + arr[i]", # 12
    "        max_sum = max(max_sum, window_sum)",           # 13
    "",                                                     # 14
    "    return max_sum",                                   # 15
]

LINES: Dict[str, Tuple[int, ...]] = {
    "init":     (1, 2),
    "prime":    (5, 6),
    "snapshot": (8,),
    "slide":    (11, 12, 13),
    "return":   (15,),
}

DEFAULT_INPUT  = [2, 1, 5, 1, 3, 2]
DEFAULT_TARGET = 0

EXAMPLES = [
    {
        "id": "max-sum-subarray",
        "name": "Maximum Sum Subarray",
        "description": "Find the maximum sum of any contiguous subarray of size k",
        "data": [2, 1, 5, 1, 3, 2],
    },
    {
        "id": "fruits-into-baskets",
        "name": "Fruits into Baskets",
        "description": "Find the length of the longest subarray with at most 2 distinct elements",
        "data": [1, 2, 1, 3, 2, 2, 1, 2],
    },
]


def total_steps(n: int, k: int = WINDOW_SIZE) -> int:
    """init + snapshot, k priming steps, one per slide, final."""
    return 2 + k + (n - k) + 1


# ---------------------------------------------------------------------------
# Generator
# ---------------------------------------------------------------------------
def sliding_window(
    data: Tuple[int, ...],
    target: int = DEFAULT_TARGET,
    k: int = WINDOW_SIZE,
) -> Generator[SimulationState, None, None]:
    """
    Yields one SimulationState per step, 0 .. total_steps(len(data)) - 1.

    Args:
        data   : Input array; len(data) >= k (checked by the evaluator).
        target : Carried through unchanged; the pattern does not use it.
        k      : Window size.
    """

    n     = len(data)
    total = total_steps(n, k)
    sb    = StateBuilder(Algorithm.SLIDING_WINDOW, data, target, total)
    step  = 0
    best  = (0, k - 1)

    # --- initialisation ---
    sb.move(left=0, right=k - 1)
    sb.lines     = LINES["init"]
    sb.message   = (
        f"Initialise window_sum = 0 and max_sum = 0. "
        f"The first window covers indices 0..{k - 1}."
    )
    sb.variables = {"k": k, "window_sum": 0, "max_sum": 0}
    yield sb.build(step)
    step += 1

    # --- prime the first window ---
    for i in range(k):
        sb.next_step()
        sb.enter(Phase.PRIMING)
        sb.window_sum += data[i]
        sb.highlight(i)
        sb.lines     = LINES["prime"]
        sb.message   = f"Add arr[{i}] = {data[i]} to the first window: window_sum = {sb.window_sum}."
        sb.variables = {"i": i, "arr[i]": data[i], "window_sum": sb.window_sum}
        yield sb.build(step)
        step += 1

    sb.next_step()
    sb.max_sum   = sb.window_sum
    sb.lines     = LINES["snapshot"]
    sb.message   = f"First window complete. max_sum = window_sum = {sb.max_sum}."
    sb.variables = {"window_sum": sb.window_sum, "max_sum": sb.max_sum}
    yield sb.build(step)
    step += 1

    # --- slide ---
    for j in range(1, n - k + 1):
        left, right = j, j + k - 1
        sb.next_step()
        sb.enter(Phase.ITERATING)
        outgoing, incoming = data[j - 1], data[right]
        sb.window_sum = sb.window_sum - outgoing + incoming
        if sb.window_sum > sb.max_sum:
            best = (left, right)
        sb.max_sum = max(sb.max_sum, sb.window_sum)
        sb.move(left=left, right=right)
        sb.highlight(j - 1, right)
        sb.lines     = LINES["slide"]
        sb.message   = (
            f"Slide to [{left}..{right}]: drop arr[{j - 1}] = {outgoing}, "
            f"add arr[{right}] = {incoming}. window_sum = {sb.window_sum}, "
            f"max_sum = {sb.max_sum}."
        )
        sb.variables = {
            "left": left,
            "right": right,
            "window_sum": sb.window_sum,
            "max_sum": sb.max_sum,
        }
        yield sb.build(step)
        step += 1

    # --- final ---
    sb.next_step()
    sb.complete(sb.max_sum)
    sb.lines     = LINES["return"]
    sb.message   = (
        f"Every window examined. The maximum sum is {sb.max_sum} "
        f"(window [{best[0]}..{best[1]}])."
    )
    sb.variables = {"max_sum": sb.max_sum, "best_window": list(best)}
    yield sb.build(step)
