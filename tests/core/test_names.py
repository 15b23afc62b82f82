"""Tests for the ``scope/name`` package-name grammar and sigil handling."""

from __future__ import annotations

import pytest

from sealpack.core.names import PackageName, is_valid_name, normalize_name
from sealpack.exceptions import InvalidPackageName, ManifestError


class TestPackageName:
    def test_parse_plain(self) -> None:
        parsed = PackageName.parse("alice/postgres")
        assert parsed.scope == "alice"
        assert parsed.name == "postgres"
        assert str(parsed) == "alice/postgres"

    def test_sigil_is_stripped(self) -> None:
        """``@alice/postgres`` and ``alice/postgres`` are the same package."""
        assert PackageName.parse("@alice/postgres") == PackageName.parse("alice/postgres")

    def test_scoped_dir_adds_sigil(self) -> None:
        assert PackageName.parse("alice/postgres").scoped_dir == "@alice"

    @pytest.mark.parametrize(
        "text",
        ["postgres", "alice/", "/postgres", "alice/pg/extra", "alice/pg_sql", "@@alice/pg", "al ice/pg", "",
         "alice/postgres\n", "@alice/postgres\n", "alice/postgres ", "alice/p\u00e9"],
    )
    def test_invalid(self, text: str) -> None:
        with pytest.raises(InvalidPackageName) as excinfo:
            PackageName.parse(text)
        assert excinfo.value.name == text
        assert not is_valid_name(text)

    def test_invalid_name_is_manifest_error(self) -> None:
        with pytest.raises(ManifestError):
            PackageName.parse("nope")


class TestNormalizeName:
    def test_idempotent(self) -> None:
        assert normalize_name("@bob/utils-2") == "bob/utils-2"
        assert normalize_name(normalize_name("@bob/utils-2")) == "bob/utils-2"
