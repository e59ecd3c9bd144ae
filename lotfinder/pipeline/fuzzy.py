"""
Fuzzy token matching - containment, subsequence and bounded edit distance.
"""


def is_subsequence(needle: str, haystack: str) -> bool:
    """Check that every character of needle appears in haystack, in order."""
    i = 0
    for char in haystack:
        if i == len(needle):
            break
        if needle[i] == char:
            i += 1
    return i == len(needle)


def levenshtein(a: str, b: str) -> int:
    """Exact edit distance with unit insert/delete/substitute costs."""
    if a == b:
        return 0
    if not a:
        return len(b)
    if not b:
        return len(a)

    row = list(range(len(b) + 1))
    for i in range(1, len(a) + 1):
        prev = row[0]
        row[0] = i
        for j in range(1, len(b) + 1):
            temp = row[j]
            cost = 0 if a[i - 1] == b[j - 1] else 1
            row[j] = min(
                row[j] + 1,
                row[j - 1] + 1,
                prev + cost,
            )
            prev = temp
    return row[len(b)]


def max_edit_distance(token: str) -> int:
    """Typo allowance grows with token length."""
    if len(token) <= 4:
        return 1
    if len(token) <= 7:
        return 2
    return 3


def token_matches(token: str, word: str) -> bool:
    """
    Decide whether a query token matches a listing word.

    Matches on substring containment in either direction, on subsequence
    ("bmw" in "b3mw"), or when the edit distance is within the allowance
    for the token length.
    """
    if not token or not word:
        return False
    if token in word or word in token:
        return True
    if is_subsequence(token, word):
        return True
    return levenshtein(token, word) <= max_edit_distance(token)
