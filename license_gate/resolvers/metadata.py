"""Extraction of license and requirement data from package metadata."""
from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from importlib.metadata import Distribution
from typing import Any, Optional

from license_expression import ExpressionError, get_spdx_licensing
from packaging.markers import Marker
from packaging.requirements import InvalidRequirement, Requirement
from packaging.utils import canonicalize_name

from license_gate.models.package import Package

logger = logging.getLogger(__name__)

_licensing = get_spdx_licensing()

# Mapping of trove classifiers to SPDX identifiers
CLASSIFIER_TO_SPDX: dict[str, str] = {
    "License :: OSI Approved :: MIT License": "MIT",
    "License :: OSI Approved :: MIT No Attribution License (MIT-0)": "MIT-0",
    "License :: OSI Approved :: Apache Software License": "Apache-2.0",
    "License :: OSI Approved :: BSD License": "BSD-3-Clause",
    "License :: OSI Approved :: GNU General Public License v3 (GPLv3)": "GPL-3.0",
    "License :: OSI Approved :: GNU General Public License v2 (GPLv2)": "GPL-2.0",
    "License :: OSI Approved :: GNU Lesser General Public License v3 (LGPLv3)": (
        "LGPL-3.0"
    ),
    "License :: OSI Approved :: GNU Lesser General Public License v2 (LGPLv2)": (
        "LGPL-2.0"
    ),
    "License :: OSI Approved :: GNU Affero General Public License v3": "AGPL-3.0",
    "License :: OSI Approved :: ISC License (ISCL)": "ISC",
    "License :: OSI Approved :: Mozilla Public License 2.0 (MPL 2.0)": "MPL-2.0",
    "License :: OSI Approved :: Python Software Foundation License": "PSF-2.0",
    "License :: OSI Approved :: The Unlicense (Unlicense)": "Unlicense",
    "License :: OSI Approved :: zlib/libpng License": "Zlib",
    "License :: CC0 1.0 Universal (CC0 1.0) Public Domain Dedication": "CC0-1.0",
}

_NO_LICENSE_VALUES = ("UNKNOWN", "NONE", "")


def split_license_expression(expression: str) -> list[str]:
    """Split an SPDX license expression into its license identifiers.

    "MIT OR Apache-2.0" yields ["MIT", "Apache-2.0"]. An expression that
    cannot be parsed is returned as a single identifier.

    Args:
        expression: SPDX license expression.

    Returns:
        Unique license identifiers in order of appearance.
    """
    cleaned = expression.strip()
    if not cleaned:
        return []
    try:
        return list(_licensing.license_keys(cleaned, unique=True))
    except ExpressionError:
        logger.debug("Keeping unparseable license expression %r as-is", cleaned)
        return [cleaned]


def licenses_from_metadata(
    license_expression: Optional[str] = None,
    license_text: Optional[str] = None,
    classifiers: Iterable[str] = (),
) -> list[str]:
    """Determine the declared licenses of a package.

    Resolution order:
    1. License-Expression field (split into identifiers)
    2. Single-line License field
    3. License trove classifiers with a known SPDX mapping

    Args:
        license_expression: Value of the License-Expression field.
        license_text: Value of the License field.
        classifiers: Trove classifiers of the package.

    Returns:
        License identifiers, empty if none are declared.
    """
    if license_expression:
        licenses = split_license_expression(license_expression)
        if licenses:
            return licenses

    if license_text:
        cleaned = license_text.strip()
        # Multi-line values hold the full license text, not an identifier
        if "\n" not in cleaned and cleaned.upper() not in _NO_LICENSE_VALUES:
            return [cleaned]

    licenses: list[str] = []
    for classifier in classifiers:
        spdx_id = CLASSIFIER_TO_SPDX.get(classifier)
        if spdx_id is not None and spdx_id not in licenses:
            licenses.append(spdx_id)
    return licenses


def _is_extras_only_marker(marker: Optional[Marker]) -> bool:
    """Check if marker makes a requirement apply only when an extra is requested.

    Args:
        marker: Parsed marker object from Requirement.

    Returns:
        True if the marker references the 'extra' variable.
    """
    if marker is None:
        return False
    return "extra" in str(marker)


def runtime_requirements(requirements: Iterable[str]) -> list[str]:
    """Extract runtime requirement names from requirement strings.

    Extras-only requirements, requirements whose environment marker does not
    match the running interpreter and malformed requirement strings are
    skipped.

    Args:
        requirements: PEP 508 requirement strings.

    Returns:
        Unique canonical requirement names in declaration order.
    """
    names: list[str] = []
    for req_str in requirements:
        try:
            req = Requirement(req_str)
        except InvalidRequirement:
            logger.debug("Skipping malformed requirement %r", req_str)
            continue

        if _is_extras_only_marker(req.marker):
            continue
        if req.marker is not None and not req.marker.evaluate():
            continue

        name = canonicalize_name(req.name)
        if name not in names:
            names.append(name)
    return names


def package_from_distribution(dist: Distribution) -> Optional[Package]:
    """Build a Package from an installed distribution.

    Args:
        dist: Installed distribution.

    Returns:
        Package, or None if the distribution lacks a name or version.
    """
    metadata = dist.metadata
    name = metadata.get("Name")
    version = metadata.get("Version")
    if not name or not version:
        return None

    return Package(
        name=canonicalize_name(name),
        pretty_name=name,
        version=version,
        licenses=licenses_from_metadata(
            license_expression=metadata.get("License-Expression"),
            license_text=metadata.get("License"),
            classifiers=metadata.get_all("Classifier") or [],
        ),
        requires=runtime_requirements(dist.requires or []),
    )


def package_from_json_metadata(metadata: Mapping[str, Any]) -> Optional[Package]:
    """Build a Package from JSON-form core metadata.

    JSON-form metadata uses lower-case keys with underscores and lists for
    multiple-use fields, as written by pip's installation report.

    Args:
        metadata: JSON-form metadata mapping.

    Returns:
        Package, or None if name or version is missing.
    """
    name = metadata.get("name")
    version = metadata.get("version")
    if not isinstance(name, str) or not isinstance(version, str):
        return None

    return Package(
        name=canonicalize_name(name),
        pretty_name=name,
        version=version,
        licenses=licenses_from_metadata(
            license_expression=metadata.get("license_expression"),
            license_text=metadata.get("license"),
            classifiers=metadata.get("classifier") or [],
        ),
        requires=runtime_requirements(metadata.get("requires_dist") or []),
    )
