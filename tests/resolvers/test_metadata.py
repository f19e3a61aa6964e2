"""Tests for package metadata extraction."""

from typing import Optional
from unittest.mock import patch

from license_expression import ExpressionError

from license_gate.resolvers import metadata
from license_gate.resolvers.metadata import (
    CLASSIFIER_TO_SPDX,
    licenses_from_metadata,
    package_from_distribution,
    package_from_json_metadata,
    runtime_requirements,
    split_license_expression,
)


class MockMetadata:
    """Mock of importlib.metadata.PackageMetadata."""

    def __init__(self, fields: dict[str, list[str]]) -> None:
        """Initialize with field name -> values."""
        self._fields = fields

    def get(self, key: str, default: Optional[str] = None) -> Optional[str]:
        """Return the first value of a field."""
        values = self._fields.get(key)
        return values[0] if values else default

    def get_all(self, key: str, failobj: Optional[list[str]] = None) -> Optional[list[str]]:
        """Return all values of a field."""
        return self._fields.get(key, failobj)


class MockDistribution:
    """Mock distribution for testing importlib.metadata.Distribution."""

    def __init__(
        self,
        fields: dict[str, list[str]],
        requires: Optional[list[str]] = None,
    ) -> None:
        """Initialize mock distribution."""
        self._metadata = MockMetadata(fields)
        self._requires = requires

    @property
    def metadata(self) -> MockMetadata:
        """Return metadata (mimics Distribution.metadata)."""
        return self._metadata

    @property
    def requires(self) -> Optional[list[str]]:
        """Return requirements list (mimics Distribution.requires)."""
        return self._requires


class TestSplitLicenseExpression:
    """Tests for split_license_expression function."""

    def test_single_identifier(self) -> None:
        """Test that a single identifier is returned as-is."""
        assert split_license_expression("MIT") == ["MIT"]

    def test_or_expression(self) -> None:
        """Test that OR expressions are split into identifiers."""
        assert split_license_expression("MIT OR Apache-2.0") == ["MIT", "Apache-2.0"]

    def test_and_expression(self) -> None:
        """Test that AND expressions are split into identifiers."""
        assert split_license_expression("MIT AND BSD-3-Clause") == [
            "MIT",
            "BSD-3-Clause",
        ]

    def test_duplicates_removed(self) -> None:
        """Test that repeated identifiers appear once."""
        assert split_license_expression("MIT OR (MIT AND ISC)") == ["MIT", "ISC"]

    def test_empty_expression(self) -> None:
        """Test that a blank expression yields no licenses."""
        assert split_license_expression("   ") == []

    def test_unparseable_expression_kept(self) -> None:
        """Test that an invalid expression is kept as one identifier."""
        with patch.object(
            metadata._licensing, "license_keys", side_effect=ExpressionError("bad")
        ):
            result = split_license_expression("Custom License v2")

        assert result == ["Custom License v2"]


class TestLicensesFromMetadata:
    """Tests for licenses_from_metadata function."""

    def test_nothing_declared(self) -> None:
        """Test that no metadata yields no licenses."""
        assert licenses_from_metadata() == []

    def test_expression_takes_precedence(self) -> None:
        """Test that License-Expression wins over License and classifiers."""
        licenses = licenses_from_metadata(
            license_expression="Apache-2.0",
            license_text="MIT",
            classifiers=["License :: OSI Approved :: BSD License"],
        )

        assert licenses == ["Apache-2.0"]

    def test_license_field(self) -> None:
        """Test that a single-line License field is used."""
        assert licenses_from_metadata(license_text="  BSD-3-Clause ") == [
            "BSD-3-Clause"
        ]

    def test_license_field_unknown_ignored(self) -> None:
        """Test that UNKNOWN falls through to classifiers."""
        licenses = licenses_from_metadata(
            license_text="UNKNOWN",
            classifiers=["License :: OSI Approved :: MIT License"],
        )

        assert licenses == ["MIT"]

    def test_multiline_license_text_ignored(self) -> None:
        """Test that full license text is not treated as an identifier."""
        licenses = licenses_from_metadata(
            license_text="Copyright (c) 2024\n\nPermission is hereby granted...",
            classifiers=["License :: OSI Approved :: MIT License"],
        )

        assert licenses == ["MIT"]

    def test_classifiers_mapped_in_order(self) -> None:
        """Test that all known license classifiers are mapped in order."""
        licenses = licenses_from_metadata(
            classifiers=[
                "Programming Language :: Python :: 3",
                "License :: OSI Approved :: Apache Software License",
                "License :: OSI Approved :: MIT License",
                "License :: OSI Approved :: Apache Software License",
            ]
        )

        assert licenses == ["Apache-2.0", "MIT"]

    def test_unknown_classifier_ignored(self) -> None:
        """Test that unmapped classifiers yield nothing."""
        licenses = licenses_from_metadata(
            classifiers=["License :: Other/Proprietary License"]
        )

        assert licenses == []

    def test_classifier_map_values_are_identifiers(self) -> None:
        """Test that every mapped classifier is a license classifier."""
        for classifier, spdx_id in CLASSIFIER_TO_SPDX.items():
            assert classifier.startswith("License ::")
            assert " " not in spdx_id


class TestRuntimeRequirements:
    """Tests for runtime_requirements function."""

    def test_plain_requirements(self) -> None:
        """Test that names are extracted and canonicalized."""
        names = runtime_requirements(["Requests>=2.0", "typing_extensions", "zope.interface"])

        assert names == ["requests", "typing-extensions", "zope-interface"]

    def test_extras_only_skipped(self) -> None:
        """Test that requirements only needed by an extra are skipped."""
        names = runtime_requirements(
            ["click>=8.0", 'pytest>=7.0; extra == "test"', "coverage ; extra == 'dev'"]
        )

        assert names == ["click"]

    def test_non_matching_marker_skipped(self) -> None:
        """Test that requirements for other environments are skipped."""
        names = runtime_requirements(
            ['legacy-backport; python_version < "3.0"', "rich"]
        )

        assert names == ["rich"]

    def test_malformed_requirement_skipped(self) -> None:
        """Test that malformed strings are skipped."""
        names = runtime_requirements(["not a valid requirement!!", "rich"])

        assert names == ["rich"]

    def test_duplicates_removed(self) -> None:
        """Test that a requirement listed twice appears once."""
        names = runtime_requirements(["rich>=13", "Rich<14"])

        assert names == ["rich"]


class TestPackageFromDistribution:
    """Tests for package_from_distribution function."""

    def test_builds_package(self) -> None:
        """Test that name, version, licenses and requirements are read."""
        dist = MockDistribution(
            {
                "Name": ["Flask-RESTful"],
                "Version": ["0.3.9"],
                "License": ["BSD"],
            },
            requires=["Flask>=0.8", 'pytest; extra == "test"'],
        )

        package = package_from_distribution(dist)  # type: ignore[arg-type]

        assert package is not None
        assert package.name == "flask-restful"
        assert package.pretty_name == "Flask-RESTful"
        assert package.version == "0.3.9"
        assert package.licenses == ["BSD"]
        assert package.requires == ["flask"]

    def test_reads_license_expression_and_classifiers(self) -> None:
        """Test that License-Expression and Classifier fields are used."""
        dist = MockDistribution(
            {
                "Name": ["dual"],
                "Version": ["1.0"],
                "License-Expression": ["MIT OR Apache-2.0"],
            }
        )
        classified = MockDistribution(
            {
                "Name": ["classified"],
                "Version": ["1.0"],
                "Classifier": ["License :: OSI Approved :: ISC License (ISCL)"],
            }
        )

        assert package_from_distribution(dist).licenses == ["MIT", "Apache-2.0"]  # type: ignore[arg-type,union-attr]
        assert package_from_distribution(classified).licenses == ["ISC"]  # type: ignore[arg-type,union-attr]

    def test_missing_name_returns_none(self) -> None:
        """Test that distributions without a name are skipped."""
        dist = MockDistribution({"Version": ["1.0"]})

        assert package_from_distribution(dist) is None  # type: ignore[arg-type]

    def test_missing_version_returns_none(self) -> None:
        """Test that distributions without a version are skipped."""
        dist = MockDistribution({"Name": ["pkg"]})

        assert package_from_distribution(dist) is None  # type: ignore[arg-type]

    def test_no_requires(self) -> None:
        """Test that a distribution without requirements has none."""
        dist = MockDistribution({"Name": ["pkg"], "Version": ["1.0"]}, requires=None)

        package = package_from_distribution(dist)  # type: ignore[arg-type]

        assert package is not None
        assert package.requires == []
        assert package.licenses == []


class TestPackageFromJsonMetadata:
    """Tests for package_from_json_metadata function."""

    def test_builds_package(self) -> None:
        """Test that JSON-form metadata keys are read."""
        package = package_from_json_metadata(
            {
                "metadata_version": "2.1",
                "name": "Sebastian-Version",
                "version": "2.0.1",
                "classifier": ["License :: OSI Approved :: BSD License"],
                "requires_dist": ["psr-log>=1.0"],
            }
        )

        assert package is not None
        assert package.name == "sebastian-version"
        assert package.pretty_name == "Sebastian-Version"
        assert package.licenses == ["BSD-3-Clause"]
        assert package.requires == ["psr-log"]

    def test_license_expression_key(self) -> None:
        """Test that license_expression is preferred."""
        package = package_from_json_metadata(
            {
                "name": "pkg",
                "version": "1.0",
                "license_expression": "Apache-2.0",
                "license": "MIT",
            }
        )

        assert package is not None
        assert package.licenses == ["Apache-2.0"]

    def test_missing_version_returns_none(self) -> None:
        """Test that entries without version are skipped."""
        assert package_from_json_metadata({"name": "pkg"}) is None
