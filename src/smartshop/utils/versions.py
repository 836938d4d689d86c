def _parts(version: str) -> list[int]:
    parts = []
    for piece in version.strip().split("."):
        # non-numeric pieces ("beta", "") count as 0
        parts.append(int(piece) if piece.isdigit() else 0)
    return parts


def compare_versions(left: str, right: str) -> int:
    """
    Compare dotted version names numerically.

    The shorter version is padded with zeros, so "1.0" == "1.0.0".

    Returns:
        1 if left is newer, -1 if right is newer, 0 if equal
    """
    a, b = _parts(left), _parts(right)
    length = max(len(a), len(b))
    a += [0] * (length - len(a))
    b += [0] * (length - len(b))
    for x, y in zip(a, b):
        if x != y:
            return 1 if x > y else -1
    return 0
