"""Fuzzy duplicate detection for company names.

Candidates come from the account search and are compared against the
normalized name the user is entering. A candidate whose normalized name is
within DUPLICATE_THRESHOLD edits is reported as a near-duplicate.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Mapping, Optional, Sequence

from .normalization import normalize_company_name

logger = logging.getLogger(__name__)

# Maximum edit distance for two normalized names to count as duplicates
DUPLICATE_THRESHOLD = 2


@dataclass(frozen=True)
class Candidate:
    """An existing account returned by the duplicate search."""
    company_name: str
    owner_referenceid: str


@dataclass(frozen=True)
class DuplicateMatch:
    """A candidate that cleared the duplicate threshold."""
    company_name: str
    owner_referenceid: str
    owner_name: str
    distance: int


@dataclass(frozen=True)
class DuplicateVerdict:
    """Outcome of comparing a name against its candidate set."""
    is_duplicate: bool = False
    matches: List[DuplicateMatch] = field(default_factory=list)
    message: str = ''
    blocking_owner: Optional[str] = None

    def to_dict(self) -> Dict:
        """Convert verdict to dictionary format."""
        return {
            'is_duplicate': self.is_duplicate,
            'message': self.message,
            'blocking_owner': self.blocking_owner,
            'matches': [
                {
                    'company_name': match.company_name,
                    'owner_referenceid': match.owner_referenceid,
                    'owner_name': match.owner_name,
                    'distance': match.distance
                }
                for match in self.matches
            ]
        }


NO_DUPLICATE = DuplicateVerdict()


def levenshtein(a: str, b: str) -> int:
    """Compute the edit distance between two strings.

    Uses the classic dynamic programming table with len(b)+1 rows and
    len(a)+1 columns.

    Args:
        a: First string
        b: Second string

    Returns:
        Minimum number of single character insertions, deletions and
        substitutions turning one string into the other
    """
    matrix = [[0] * (len(a) + 1) for _ in range(len(b) + 1)]
    for i in range(len(b) + 1):
        matrix[i][0] = i
    for j in range(len(a) + 1):
        matrix[0][j] = j

    for i in range(1, len(b) + 1):
        for j in range(1, len(a) + 1):
            if b[i - 1] == a[j - 1]:
                matrix[i][j] = matrix[i - 1][j - 1]
            else:
                matrix[i][j] = 1 + min(
                    matrix[i - 1][j - 1],
                    matrix[i][j - 1],
                    matrix[i - 1][j]
                )

    return matrix[len(b)][len(a)]


def find_duplicates(
    normalized_name: str,
    candidates: Sequence[Candidate],
    current_owner_id: str,
    owner_names: Optional[Mapping[str, str]] = None
) -> DuplicateVerdict:
    """Find near-duplicates of a normalized name among candidate accounts.

    Each candidate's stored name is normalized before comparison. When
    matches are found, an account owned by someone else takes priority in
    the message; otherwise the closest match owned by the current user is
    named.

    Args:
        normalized_name: Name being entered, already normalized
        candidates: Accounts returned by the duplicate search
        current_owner_id: Reference id of the user entering the name
        owner_names: Optional reference id to display name lookup

    Returns:
        DuplicateVerdict describing the matches and the message to show
    """
    owner_names = owner_names or {}
    matches = []

    for candidate in candidates:
        distance = levenshtein(normalized_name, normalize_company_name(candidate.company_name))
        if distance > DUPLICATE_THRESHOLD:
            continue

        owner_id = candidate.owner_referenceid
        matches.append(DuplicateMatch(
            company_name=candidate.company_name,
            owner_referenceid=owner_id,
            owner_name=owner_names.get(owner_id) or owner_id,
            distance=distance
        ))

    if not matches:
        logger.debug(f"No duplicates for {normalized_name!r} among {len(candidates)} candidates")
        return NO_DUPLICATE

    other_owner = next(
        (match for match in matches if match.owner_referenceid != current_owner_id),
        None
    )

    if other_owner:
        message = f'Duplicate company owned by another TSA: "{other_owner.owner_name}"'
        blocking_owner = other_owner.owner_referenceid
    else:
        closest = min(matches, key=lambda match: match.distance)
        message = f'Possible duplicate detected (owned by you): "{closest.company_name}"'
        blocking_owner = None

    logger.info(f"Found {len(matches)} possible duplicates for {normalized_name!r}")
    return DuplicateVerdict(
        is_duplicate=True,
        matches=matches,
        message=message,
        blocking_owner=blocking_owner
    )
