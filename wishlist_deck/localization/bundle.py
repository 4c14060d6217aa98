"""
Content bundle helpers

A content bundle is the nested dict of copy strings that fills every page
template. Translations may change leaf strings only; the key structure
must match the English source exactly.
"""

from typing import Any, Dict, Tuple

from ..common.errors import LocalizationError

ContentBundle = Dict[str, Any]


def bundle_structure(bundle: ContentBundle) -> Tuple:
    """
    Return the key structure of a bundle as a nested, sorted tuple.

    Leaves are represented by their type name, so two bundles with the same
    keys and string leaves have equal structures.
    """
    if isinstance(bundle, dict):
        return tuple((key, bundle_structure(bundle[key])) for key in sorted(bundle))
    return (type(bundle).__name__,)


def validate_bundle_structure(source: ContentBundle, candidate: Any) -> ContentBundle:
    """
    Check that candidate has exactly the keys of source and string leaves.

    Returns:
        candidate, unchanged

    Raises:
        LocalizationError: On any missing key, extra key or non-string leaf
    """
    if bundle_structure(candidate) != bundle_structure(source):
        _compare(source, candidate, path="")
    return candidate


def _compare(source: Any, candidate: Any, path: str) -> None:
    label = path or "<root>"
    if isinstance(source, dict):
        if not isinstance(candidate, dict):
            raise LocalizationError(f"{label}: expected an object, got {type(candidate).__name__}")
        missing = set(source) - set(candidate)
        extra = set(candidate) - set(source)
        if missing:
            raise LocalizationError(f"{label}: missing keys {sorted(missing)}")
        if extra:
            raise LocalizationError(f"{label}: unexpected keys {sorted(extra)}")
        for key in source:
            _compare(source[key], candidate[key], f"{path}.{key}" if path else key)
    elif not isinstance(candidate, str):
        raise LocalizationError(f"{label}: expected a string, got {type(candidate).__name__}")
