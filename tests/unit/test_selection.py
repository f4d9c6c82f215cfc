"""Tests for selection strategies."""

import pytest


SAMPLE = ["14.0.0.0/de", "14.0.0.0/platform", "15.1.2.3/de", "15.1.2.3/platform"]


@pytest.mark.core
@pytest.mark.tra("Selection.Simple")
@pytest.mark.tier(0)
class TestSimpleSelections:
    """Tests for All, Latest and First."""

    def test_all_sorts_numerically(self) -> None:
        """All returns every name ascending by version, not by string."""
        from artifacturl.core.selection import select_all

        names = ["14.10.0.0/w1", "14.9.0.0/w1", "14.2.0.0/w1"]

        assert select_all(names) == ["14.2.0.0/w1", "14.9.0.0/w1", "14.10.0.0/w1"]

    def test_latest_after_country_filter(self) -> None:
        """Latest for country 'de' picks 15.1.2.3/de."""
        from artifacturl.core.filtering import filter_candidates
        from artifacturl.core.models import BlobEntry, ResolutionRequest
        from artifacturl.core.selection import select_latest

        names = filter_candidates(
            [BlobEntry(n) for n in SAMPLE], ResolutionRequest(country="de")
        )

        assert select_latest(names) == ["15.1.2.3/de"]

    def test_first_after_country_filter(self) -> None:
        """First for country 'de' picks 14.0.0.0/de."""
        from artifacturl.core.filtering import filter_candidates
        from artifacturl.core.models import BlobEntry, ResolutionRequest
        from artifacturl.core.selection import select_first

        names = filter_candidates(
            [BlobEntry(n) for n in SAMPLE], ResolutionRequest(country="de")
        )

        assert select_first(names) == ["14.0.0.0/de"]

    @pytest.mark.parametrize(
        "names",
        [
            [],
            ["1.0.0.0/w1"],
            ["3.0.0.0/w1", "1.0.0.0/w1", "2.0.0.0/w1"],
            ["1.10.0.0/w1", "1.9.0.0/w1", "1.9.0.0/de"],
        ],
    )
    def test_latest_of_all_equals_latest(self, names: list[str]) -> None:
        """Latest(All(S)) == Latest(S)."""
        from artifacturl.core.selection import select_all, select_latest

        assert select_latest(select_all(names)) == select_latest(names)

    def test_empty_input_yields_empty_output(self) -> None:
        """Every strategy returns [] for an empty set."""
        from artifacturl.core.models import ArtifactSelect
        from artifacturl.core.selection import select
        from artifacturl.core.version import Version

        for strategy in (
            ArtifactSelect.ALL,
            ArtifactSelect.LATEST,
            ArtifactSelect.FIRST,
            ArtifactSelect.SECOND_TO_LAST_MAJOR,
        ):
            assert select([], strategy) == []
        assert select([], ArtifactSelect.CLOSEST, Version(1)) == []


@pytest.mark.core
@pytest.mark.tra("Selection.Closest")
@pytest.mark.tier(0)
class TestClosest:
    """Tests for Closest."""

    NAMES = ["24.1.10.0/w1", "24.1.2.0/w1", "24.1.30.0/w1"]

    def test_picks_lowest_at_or_above_target(self) -> None:
        """The smallest version >= target is chosen."""
        from artifacturl.core.selection import select_closest
        from artifacturl.core.version import Version

        assert select_closest(self.NAMES, Version(24, 1, 5, 0)) == ["24.1.10.0/w1"]

    def test_exact_match(self) -> None:
        """An exact match is itself the closest."""
        from artifacturl.core.selection import select_closest
        from artifacturl.core.version import Version

        assert select_closest(self.NAMES, Version(24, 1, 2, 0)) == ["24.1.2.0/w1"]

    def test_falls_back_to_maximum(self) -> None:
        """When nothing is >= target, the overall maximum is returned."""
        from artifacturl.core.selection import select_closest
        from artifacturl.core.version import Version

        assert select_closest(self.NAMES, Version(24, 1, 99, 0)) == ["24.1.30.0/w1"]

    def test_never_below_target_when_higher_exists(self) -> None:
        """Closest never returns an element below target if one >= exists."""
        from artifacturl.core.selection import select_closest
        from artifacturl.core.version import Version

        for target in (Version(24, 1, 0, 0), Version(24, 1, 11, 0), Version(24, 1, 30, 0)):
            (chosen,) = select_closest(self.NAMES, target)
            assert Version.from_artifact_name(chosen) >= target

    def test_select_requires_target(self) -> None:
        """select(CLOSEST) without a target is a programming error."""
        from artifacturl.core.models import ArtifactSelect
        from artifacturl.core.selection import select

        with pytest.raises(ValueError, match="target"):
            select(self.NAMES, ArtifactSelect.CLOSEST)


@pytest.mark.core
@pytest.mark.tra("Selection.SecondToLastMajor")
@pytest.mark.tier(0)
class TestSecondToLastMajor:
    """Tests for SecondToLastMajor."""

    def test_newest_of_previous_major(self) -> None:
        """Across majors 14 and 15, the newest 14.x is returned."""
        from artifacturl.core.selection import select_second_to_last_major

        names = ["14.5.0.0/w1", "15.0.0.0/w1", "15.2.0.0/w1"]

        assert select_second_to_last_major(names) == ["14.5.0.0/w1"]

    def test_skips_older_majors(self) -> None:
        """Only the second-newest major line is considered."""
        from artifacturl.core.selection import select_second_to_last_major

        names = ["13.9.0.0/w1", "14.1.0.0/w1", "14.3.0.0/w1", "15.0.0.0/w1"]

        assert select_second_to_last_major(names) == ["14.3.0.0/w1"]

    def test_single_major_yields_empty(self) -> None:
        """All elements in one major line means no result."""
        from artifacturl.core.selection import select_second_to_last_major

        assert select_second_to_last_major(["15.0.0.0/w1", "15.2.0.0/w1"]) == []


@pytest.mark.core
@pytest.mark.tra("Selection.Dispatch")
@pytest.mark.tier(0)
class TestSelectDispatch:
    """Tests for select()."""

    @pytest.mark.parametrize("strategy", ["Current", "NextMinor", "NextMajor", "Daily", "Weekly"])
    def test_composite_strategies_rejected(self, strategy: str) -> None:
        """Composite selections cannot be applied to a listing."""
        from artifacturl.core.models import ArtifactSelect
        from artifacturl.core.selection import select

        with pytest.raises(ValueError, match="composite"):
            select(["1.0.0.0/w1"], ArtifactSelect(strategy))

    def test_does_not_mutate_input(self) -> None:
        """Selection returns new lists."""
        from artifacturl.core.models import ArtifactSelect
        from artifacturl.core.selection import select

        names = ["2.0.0.0/w1", "1.0.0.0/w1"]
        select(names, ArtifactSelect.ALL)

        assert names == ["2.0.0.0/w1", "1.0.0.0/w1"]
