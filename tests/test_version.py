"""Tests for version parsing and next-version inference."""

import pytest
from pydantic import ValidationError

from releaser.exceptions import NoQualifyingChangeError, ParseError
from releaser.github import Release
from releaser.version import PRType, Version, classify_pr, parse_tag


class TestParseTag:
    """Tests for parse_tag()."""

    @pytest.mark.parametrize("tag,want", [
        ("collectd-6.0.0", "6.0.0"),
        ("collectd-6.0.0.rc0", "6.0.0.rc0"),
        ("collectd-6.12.3", "6.12.3"),
        ("collectd-6.1.0-beta", "6.1.0-beta"),
    ])
    def test_valid(self, tag, want):
        """Valid tags round-trip through str()."""
        assert str(parse_tag(tag)) == want

    def test_components(self):
        """Components are parsed as integers and suffix verbatim."""
        v = parse_tag("collectd-6.2.10.rc3")

        assert v.major == 6
        assert v.minor == 2
        assert v.patch == 10
        assert v.suffix == ".rc3"

    @pytest.mark.parametrize("tag", [
        "foo-6.0.0",
        "collectd-6.0",
        "collectd-5.12.0",
        "collectd-7.0.0",
        "6.0.0",
        "",
    ])
    def test_invalid(self, tag):
        """Wrong prefix, epoch or missing components are rejected."""
        with pytest.raises(ParseError, match="unable to parse tag"):
            parse_tag(tag)

    def test_error_names_tag(self):
        """ParseError carries the offending tag."""
        with pytest.raises(ParseError) as exc_info:
            parse_tag("foo-6.0.0")
        assert exc_info.value.tag == "foo-6.0.0"

    def test_from_release(self):
        """A release is parsed by its tag name."""
        release = Release(name="6.0.0", tag_name="collectd-6.0.0")
        assert str(parse_tag(release)) == "6.0.0"

    def test_tag(self):
        """Version.tag adds the collectd- prefix."""
        assert parse_tag("collectd-6.0.0.rc0").tag == "collectd-6.0.0.rc0"


class TestVersion:
    """Tests for the Version model."""

    def test_epoch_enforced(self):
        """Only major version 6 is accepted."""
        with pytest.raises(ValidationError):
            Version(major=5, minor=0, patch=0)

    def test_immutable(self):
        """Versions cannot be modified."""
        v = Version(minor=1, patch=2)
        with pytest.raises(ValidationError):
            v.minor = 3


class TestClassifyPR:
    """Tests for classify_pr()."""

    def test_feature_wins(self, make_pr):
        """A Feature label wins regardless of order."""
        assert classify_pr(make_pr(labels=["Fix", "Feature"])) == PRType.FEATURE
        assert classify_pr(make_pr(labels=["Feature", "Fix"])) == PRType.FEATURE

    def test_fix(self, make_pr):
        """A Fix label without Feature is a fix."""
        assert classify_pr(make_pr(labels=["core", "Fix"])) == PRType.FIX

    def test_maintenance(self, make_pr):
        """Anything else is maintenance."""
        assert classify_pr(make_pr(labels=["Maintenance"])) == PRType.MAINTENANCE
        assert classify_pr(make_pr()) == PRType.MAINTENANCE

    def test_case_sensitive(self, make_pr):
        """Label names must match exactly."""
        assert classify_pr(make_pr(labels=["feature", "fix"])) == PRType.MAINTENANCE

    def test_ordering(self):
        """Maintenance < Fix < Feature."""
        assert PRType.MAINTENANCE < PRType.FIX < PRType.FEATURE


class TestNext:
    """Tests for Version.next()."""

    def test_feature_release(self, make_pr):
        """A Feature PR bumps the minor version."""
        prs = [make_pr(labels=["Feature"]), make_pr(labels=["Fix"]), make_pr(labels=["Maintenance"])]
        assert str(parse_tag("collectd-6.0.0").next(prs)) == "6.1.0"

    def test_feature_keeps_patch(self, make_pr):
        """A minor bump leaves the patch version alone."""
        prs = [make_pr(labels=["Feature"])]
        assert str(parse_tag("collectd-6.0.3").next(prs)) == "6.1.3"

    def test_fix_release(self, make_pr):
        """A Fix PR bumps the patch version."""
        prs = [make_pr(labels=["Maintenance"]), make_pr(labels=["Fix"]), make_pr(labels=["Maintenance"])]
        assert str(parse_tag("collectd-6.0.0").next(prs)) == "6.0.1"

    def test_maintenance_only(self, make_pr):
        """Only maintenance PRs is nothing to release."""
        prs = [make_pr(labels=["Maintenance"]), make_pr(labels=["Maintenance"])]
        with pytest.raises(NoQualifyingChangeError):
            parse_tag("collectd-6.0.0").next(prs)

    def test_no_prs(self):
        """An empty set of PRs is nothing to release."""
        with pytest.raises(NoQualifyingChangeError):
            parse_tag("collectd-6.0.0").next([])

    def test_maintenance_only_with_suffix(self, make_pr):
        """A suffix does not make maintenance PRs releasable."""
        with pytest.raises(NoQualifyingChangeError):
            parse_tag("collectd-6.0.0.rc0").next([make_pr(labels=["Maintenance"])])

    @pytest.mark.parametrize("labels", [["Feature"], ["Fix"], ["Feature", "Fix"]])
    @pytest.mark.parametrize("tag,want", [
        ("collectd-6.0.0.rc0", "6.0.0.rc1"),
        ("collectd-6.0.0.rc9", "6.0.0.rc10"),
        ("collectd-6.1.2-beta3-pre", "6.1.2-beta4-pre"),
        ("collectd-6.0.0.rc", "6.0.0.rc0"),
        ("collectd-6.0.0.1.2", "6.0.0.2.2"),
    ])
    def test_suffix_overrides_bump(self, make_pr, labels, tag, want):
        """A suffixed version only advances its suffix."""
        prs = [make_pr(labels=[label]) for label in labels]
        assert str(parse_tag(tag).next(prs)) == want

    def test_input_untouched(self, make_pr):
        """next() returns a new version."""
        v = parse_tag("collectd-6.0.0")
        v.next([make_pr(labels=["Feature"])])
        assert str(v) == "6.0.0"


class TestNextSuffix:
    """Tests for Version.next_suffix()."""

    @pytest.mark.parametrize("suffix,want", [
        (".rc0", ".rc1"),
        ("rc", "rc0"),
        ("", "0"),
        ("7", "8"),
        (".rc007", ".rc8"),
    ])
    def test_next_suffix(self, suffix, want):
        """The first digit run is incremented, otherwise 0 is appended."""
        assert Version(suffix=suffix).next_suffix().suffix == want
