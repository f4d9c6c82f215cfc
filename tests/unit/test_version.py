"""Tests for the Version value type."""

import pytest


@pytest.mark.core
@pytest.mark.tra("Domain.Version")
@pytest.mark.tier(0)
class TestVersionParse:
    """Tests for Version.parse."""

    def test_parse_full_version(self) -> None:
        """Four numeric components should map to major.minor.build.revision."""
        from artifacturl.core.version import Version

        v = Version.parse("24.1.18989.0")

        assert v.as_tuple() == (24, 1, 18989, 0)

    def test_parse_pads_missing_components(self) -> None:
        """Missing trailing components should default to 0."""
        from artifacturl.core.version import Version

        assert Version.parse("24") == Version(24, 0, 0, 0)
        assert Version.parse("24.1") == Version(24, 1, 0, 0)

    def test_str_drops_zero_padding(self) -> None:
        """Stringification should round-trip the numeric value."""
        from artifacturl.core.version import Version

        assert str(Version.parse("024.01.003.4")) == "24.1.3.4"

    @pytest.mark.parametrize("value", ["24.1.x.0", "24..1", "-1.0.0.0", "", "24.1 .0"])
    def test_parse_rejects_non_numeric(self, value: str) -> None:
        """Non-numeric, empty or negative components should be rejected."""
        from artifacturl.core.exceptions import InvalidVersionError
        from artifacturl.core.version import Version

        with pytest.raises(InvalidVersionError):
            Version.parse(value)

    def test_parse_rejects_more_than_four_parts(self) -> None:
        """A fifth component should be rejected."""
        from artifacturl.core.exceptions import InvalidVersionError
        from artifacturl.core.version import Version

        with pytest.raises(InvalidVersionError, match="at most 4"):
            Version.parse("1.2.3.4.5")

    def test_parse_full_requires_four_parts(self) -> None:
        """full=True should demand exactly four components."""
        from artifacturl.core.exceptions import InvalidVersionError
        from artifacturl.core.version import Version

        with pytest.raises(InvalidVersionError, match="1.2.3.4"):
            Version.parse("24.1", full=True)
        assert Version.parse("24.1.0.0", full=True) == Version(24, 1)

    def test_invalid_version_is_request_validation_error(self) -> None:
        """Parse failures should be catchable as request validation errors."""
        from artifacturl.core.exceptions import RequestValidationError
        from artifacturl.core.version import Version

        with pytest.raises(RequestValidationError):
            Version.parse("abc")

    def test_negative_component_rejected_on_construction(self) -> None:
        """Constructing a Version with a negative component should fail."""
        from artifacturl.core.exceptions import InvalidVersionError
        from artifacturl.core.version import Version

        with pytest.raises(InvalidVersionError):
            Version(1, -1)


@pytest.mark.core
@pytest.mark.tra("Domain.Version")
@pytest.mark.tier(0)
class TestVersionOrdering:
    """Tests for numeric version ordering."""

    def test_numeric_not_lexicographic(self) -> None:
        """14.10 should sort after 14.9."""
        from artifacturl.core.version import Version

        assert Version.parse("14.9") < Version.parse("14.10")
        assert Version.parse("9.0.0.0") < Version.parse("10.0.0.0")

    def test_most_significant_component_first(self) -> None:
        """Major should outweigh every lower component."""
        from artifacturl.core.version import Version

        assert Version(15, 0, 0, 0) > Version(14, 99, 99999, 99)

    def test_padded_versions_compare_equal(self) -> None:
        """'24.1' and '24.1.0.0' should be the same version."""
        from artifacturl.core.version import Version

        assert Version.parse("24.1") == Version.parse("24.1.0.0")

    def test_total_order(self) -> None:
        """Sorting should be transitive and antisymmetric over a sample."""
        from itertools import permutations

        from artifacturl.core.version import Version

        sample = [Version.parse(s) for s in ("1.2.3.4", "1.10", "1.2.3.10", "2", "1.2")]
        for a, b, c in permutations(sample, 3):
            if a <= b and b <= c:
                assert a <= c
            if a <= b and b <= a:
                assert a == b


@pytest.mark.core
@pytest.mark.tra("Domain.Version")
@pytest.mark.tier(0)
class TestVersionHelpers:
    """Tests for artifact-name parsing and prefixes."""

    def test_from_artifact_name(self) -> None:
        """The version segment before '/' should be parsed."""
        from artifacturl.core.version import Version

        assert Version.from_artifact_name("15.1.2.3/de") == Version(15, 1, 2, 3)

    def test_prefix(self) -> None:
        """prefix(n) should render n components and a trailing dot."""
        from artifacturl.core.version import Version

        v = Version(24, 1, 5, 0)

        assert v.prefix(1) == "24."
        assert v.prefix(2) == "24.1."
