from __future__ import annotations


class SearchInvariantError(RuntimeError):
    """Bookkeeping of the isomorphism search became inconsistent.

    Raised for removals of absent candidates, double insertion into the
    frontier and similar misuse. Always indicates a bug, never a property
    of the input graphs.
    """


class SearchCancelled(RuntimeError):
    """The caller's cancellation check requested the search to stop."""
