# SPDX-License-Identifier: MIT
"""Publishing system headers from a vendor project.

A vendor project holds (or syncs in) a system header tree and publishes
it to dependent projects through two consumable configurations:

    <name>SystemHeadersElements   the header directories
    <name>SystemVersionsElements  the version marker file(s)

The version marker is what dependent compile tasks fingerprint, so it has
to change whenever the headers do. ``write_version_marker()`` derives the
marker from a digest of the header tree to guarantee that.
"""

from __future__ import annotations

import hashlib
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

from sysinc.core.attributes import USAGE_ATTRIBUTE, AttributeSet
from sysinc.core.configuration import ConfigurationRole
from sysinc.core.naming import configuration_name, uncapitalize

if TYPE_CHECKING:
    from collections.abc import Sequence

    from sysinc.core.configuration import Configuration
    from sysinc.core.project import Project

logger = logging.getLogger(__name__)


def compute_headers_digest(
    directory: Path | str, exclude: Path | str | None = None
) -> str:
    """SHA-256 over the relative paths and contents of a header tree.

    ``exclude`` names a file to leave out, typically a version marker kept
    inside the tree it describes.
    """
    root = Path(directory)
    if not root.is_dir():
        raise NotADirectoryError(f"header directory not found: {root}")
    skip = Path(exclude).resolve() if exclude is not None else None

    h = hashlib.sha256()
    for path in sorted(p for p in root.rglob("*") if p.is_file()):
        if skip is not None and path.resolve() == skip:
            continue
        h.update(path.relative_to(root).as_posix().encode())
        h.update(b"\0")
        h.update(path.read_bytes())
        h.update(b"\0")
    return h.hexdigest()


def write_version_marker(
    path: Path | str,
    headers_dir: Path | str,
    version: str | None = None,
) -> bool:
    """Write a version marker for a header tree.

    The marker contains the optional version string and the header
    digest. An unchanged marker is not rewritten.

    Returns:
        True if the file was written.
    """
    marker = Path(path)
    digest = compute_headers_digest(headers_dir, exclude=marker)
    content = f"{version or ''}\n{digest}\n"
    if marker.is_file() and marker.read_text() == content:
        return False
    marker.parent.mkdir(parents=True, exist_ok=True)
    marker.write_text(content)
    logger.info("Wrote version marker %s", marker)
    return True


@dataclass
class SystemHeadersBundle:
    """The consumable configurations published by a vendor project."""

    headers: Configuration
    versions: Configuration


def publish_system_headers(
    project: Project,
    headers: Path | str | Sequence[Path | str],
    version_file: Path | str,
    *,
    attributes: AttributeSet | None = None,
    name: str = "",
) -> SystemHeadersBundle:
    """Publish header directories and a version marker from ``project``.

    Args:
        project: The vendor project.
        headers: Header directory (or directories), relative to root_dir.
        version_file: Version marker file, relative to root_dir.
        attributes: Platform attributes to publish under; none means the
            bundle matches every platform.
        name: Prefix of the configuration names; without one they are
            "systemHeadersElements" and "systemVersionsElements".

    Returns:
        The two consumable configurations.
    """
    base = (attributes or AttributeSet()).without(USAGE_ATTRIBUTE)
    if isinstance(headers, (str, Path)):
        headers = [headers]

    def _create(role: ConfigurationRole) -> Configuration:
        return project.configurations.create(
            uncapitalize(configuration_name(name, role)),
            role=role,
            attributes=AttributeSet.of((USAGE_ATTRIBUTE, role.usage)).merge(base),
            extends_from=[project.implementation],
            description=f"{role.label} published by project '{project.name}'.",
        )

    bundle = SystemHeadersBundle(
        headers=_create(ConfigurationRole.CONSUMABLE_HEADERS),
        versions=_create(ConfigurationRole.CONSUMABLE_VERSIONS),
    )
    for directory in headers:
        bundle.headers.add_artifact(project.root_dir / directory)
    bundle.versions.add_artifact(project.root_dir / version_file)
    logger.debug("Published system headers from %s", project.name)
    return bundle
