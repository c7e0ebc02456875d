# Copyright 2026 Kezie Iwueke
# SPDX-License-Identifier: Apache-2.0

# src/clusterconf/images/resolver.py

from __future__ import annotations

import logging
from typing import Callable, Dict, Iterable, List, Optional

from clusterconf.config.defaults import DEFAULT_K8S_VERSION
from clusterconf.config.models import PRIMARY_IMAGE_FIELD, SystemImages
from clusterconf.errors import UnsupportedVersionError
from clusterconf.images import catalog

log = logging.getLogger("clusterconf")


def resolve_images(requested: str) -> SystemImages:
    """
    Resolve a version-or-image answer into a full image set.

    A known version key returns that version's images unchanged. Anything
    else is taken as a custom orchestrator image layered over the default
    version's set.
    """
    images = catalog.lookup(requested)
    if images is not None:
        return images

    log.debug("'%s' is not a known version, using it as the %s image", requested, PRIMARY_IMAGE_FIELD)
    return catalog.default_images().model_copy(update={PRIMARY_IMAGE_FIELD: requested})


def unique(values: Iterable[str]) -> List[str]:
    """Drop empties and repeats, keeping first-seen order."""
    seen: set[str] = set()
    out: List[str] = []
    for v in values:
        if not v or v in seen:
            continue
        seen.add(v)
        out.append(v)
    return out


def list_unique_images(images: SystemImages) -> List[str]:
    return unique(images.images())


def list_all_versions() -> List[str]:
    return list(catalog.K8S_VERSION_TO_SYSTEM_IMAGES)


def images_for_version(version: str) -> List[str]:
    images = catalog.lookup(version)
    if images is None:
        raise UnsupportedVersionError(version, list_all_versions())
    return list_unique_images(images)


def list_images_for_all_versions() -> Dict[str, List[str]]:
    """Unique image list per catalog version. Do not rely on key order."""
    return {
        version: list_unique_images(images)
        for version, images in catalog.K8S_VERSION_TO_SYSTEM_IMAGES.items()
    }


def generate_system_images_list(
    version: Optional[str],
    all_versions: bool,
    emit: Callable[[str], None] = print,
) -> None:
    """
    Bulk listing mode: print one image per line for a single version
    (default version when none given) or for every catalog version.
    """
    if all_versions:
        for v, images in list_images_for_all_versions().items():
            log.info("Generating images list for version [%s]:", v)
            for image in images:
                emit(image)
        return

    version = version or DEFAULT_K8S_VERSION
    images = images_for_version(version)
    log.info("Generating images list for version [%s]:", version)
    for image in images:
        emit(image)
