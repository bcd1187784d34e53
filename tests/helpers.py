"""Shared sample data and a brute-force oracle for the tests."""

SAMPLE_INPUT = """\
[.##.] (3) (1,3) (2) (2,3) (0,2) (0,1) {3,5,4,7}
[...#.] (0,2,3,4) (2,3) (0,4) (0,1,2) (1,2,3,4) {7,5,12,7,2}
[.###.#] (0,1,2,3,4) (0,3,4) (0,1,2,4,5) (1,2) {10,11,11,5,10,5}
"""

SAMPLE_MACHINES = [
    ([3, 5, 4, 7], [[3], [1, 3], [2], [2, 3], [0, 2], [0, 1]], 10),
    ([7, 5, 12, 7, 2], [[0, 2, 3, 4], [2, 3], [0, 4], [0, 1, 2], [1, 2, 3, 4]], 12),
    ([10, 11, 11, 5, 10, 5], [[0, 1, 2, 3, 4], [0, 3, 4], [0, 1, 2, 4, 5], [1, 2]], 11),
]


def brute_force(targets, masks):
    """Minimum total presses by exhaustive enumeration, or None if infeasible."""
    best = None

    def walk(j, remaining, presses):
        nonlocal best
        if best is not None and presses >= best:
            return
        if j == len(masks):
            if not any(remaining):
                best = presses
            return
        mask = masks[j]
        limit = min((remaining[i] for i in mask), default=0)
        for count in range(limit + 1):
            walk(j + 1, [r - count if i in mask else r for i, r in enumerate(remaining)], presses + count)

    walk(0, list(targets), 0)
    return best
