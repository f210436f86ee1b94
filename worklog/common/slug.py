"""Repository slug utilities.

Repository slugs are GitHub identifiers in ``owner/name`` format. They are not
filesystem paths, even though they use ``/`` as a separator, so they should be
parsed using these helpers rather than ``pathlib``.
"""

from __future__ import annotations


def repo_slug(owner: str, name: str) -> str:
    """Build a repository slug from owner and name.

    Examples
    --------
    >>> repo_slug("octo", "reef")
    'octo/reef'

    """
    return f"{owner}/{name}"


def parse_repo_slug(slug: str) -> tuple[str, str]:
    """Parse a repository slug into owner and name.

    Surrounding whitespace is ignored, matching how comma-separated
    repository lists are written in ``.env`` files.

    Parameters
    ----------
    slug:
        Repository slug in ``owner/name`` format.

    Returns
    -------
    tuple[str, str]
        ``(owner, name)``.

    Raises
    ------
    ValueError
        If the slug is not in ``owner/name`` format.

    Examples
    --------
    >>> parse_repo_slug(" octo/reef ")
    ('octo', 'reef')

    """
    text = slug.strip()
    if text.count("/") != 1:
        msg = f"Invalid repository slug: expected 'owner/name', got {slug!r}"
        raise ValueError(msg)

    owner, name = (part.strip() for part in text.split("/"))
    if not owner or not name:
        msg = f"Invalid repository slug: expected 'owner/name', got {slug!r}"
        raise ValueError(msg)

    return owner, name


def split_csv(raw: str) -> tuple[str, ...]:
    """Split a comma-separated setting into trimmed, non-empty entries.

    >>> split_csv("octo/reef, octo/kelp,,")
    ('octo/reef', 'octo/kelp')

    """
    return tuple(part.strip() for part in raw.split(",") if part.strip())
