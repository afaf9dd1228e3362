"""Tests for the field-value visibility predicate `matches()`.

A stored key is visible in a requested language/version when each of its
scope parts is either unset or equal to the requested one.
"""

from __future__ import annotations

import uuid

import pytest
from hypothesis import given
from hypothesis import strategies as st

from itemstore.domain.model import FieldValueKey, VersionUri, matches

FIELD = uuid.UUID("75577384-3c97-45da-a847-81b00500e250")

languages = st.one_of(st.none(), st.sampled_from(["en", "da", "de-DE", "fr"]))
versions = st.one_of(st.none(), st.integers(min_value=0, max_value=50))


@pytest.mark.parametrize(
    "key, scope, expected",
    [
        (FieldValueKey(FIELD), VersionUri("en", 1), True),
        (FieldValueKey(FIELD, "en"), VersionUri("en", 3), True),
        (FieldValueKey(FIELD, "en"), VersionUri("da", 3), False),
        (FieldValueKey(FIELD, None, 2), VersionUri("da", 2), True),
        (FieldValueKey(FIELD, None, 2), VersionUri("da", 3), False),
        (FieldValueKey(FIELD, "en", 1), VersionUri("en", 1), True),
        (FieldValueKey(FIELD, "en", 1), VersionUri("en", 2), False),
        (FieldValueKey(FIELD, "en", 1), VersionUri(None, 1), False),
        (FieldValueKey(FIELD, "en", 1), VersionUri(None, None), False),
        (FieldValueKey(FIELD), VersionUri(None, None), True),
    ],
    ids=[
        "shared-unversioned",
        "unversioned-same-language",
        "unversioned-other-language",
        "shared-same-version",
        "shared-other-version",
        "exact",
        "other-version",
        "no-language-requested",
        "nothing-requested",
        "shared-unversioned-nothing-requested",
    ],
)
def test_matches_table(key: FieldValueKey, scope: VersionUri, expected: bool):
    """Each scope part of the key is a wildcard when unset, else must be equal."""
    assert matches(key, scope) is expected
    assert key.matches(scope) is expected


@pytest.mark.property
@given(language=languages, version=versions)
def test_shared_unversioned_key_matches_everything(language, version):
    """A key with neither language nor version is visible in every scope."""
    assert matches(FieldValueKey(FIELD), VersionUri(language, version))


@pytest.mark.property
@given(language=languages, version=versions)
def test_key_matches_its_own_scope(language, version):
    """A key is always visible in exactly its own language/version."""
    key = FieldValueKey(FIELD, language, version)
    assert matches(key, key.as_version_uri())


@pytest.mark.property
@given(
    key_language=languages,
    key_version=versions,
    language=languages,
    version=versions,
)
def test_matches_is_the_conjunction_of_both_parts(
    key_language, key_version, language, version
):
    """Language and version are checked independently of each other."""
    key = FieldValueKey(FIELD, key_language, key_version)
    language_ok = matches(FieldValueKey(FIELD, key_language), VersionUri(language, version))
    version_ok = matches(
        FieldValueKey(FIELD, None, key_version), VersionUri(language, version)
    )
    assert matches(key, VersionUri(language, version)) == (language_ok and version_ok)


@pytest.mark.property
@given(language=st.sampled_from(["en", "da"]), version=st.integers(1, 9))
def test_fully_scoped_key_is_not_visible_elsewhere(language, version):
    """A fully scoped key is invisible in any other language or version."""
    key = FieldValueKey(FIELD, language, version)
    assert not matches(key, VersionUri(language, version + 1))
    assert not matches(key, VersionUri("xx", version))
