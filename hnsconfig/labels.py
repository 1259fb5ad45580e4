"""Label and finalizer bookkeeping on namespaces and hierarchy singletons."""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence

from hnsconfig.objects import (
    FINALIZER_HAS_SUBNAMESPACE,
    LABEL_INCLUDED_NAMESPACE,
    LABEL_TREE_DEPTH_SUFFIX,
    HierarchyConfiguration,
    NamespaceObject,
)

log = logging.getLogger(__name__)


def add_included_namespace_label(ns_inst: NamespaceObject) -> bool:
    """Set the included-namespace label to "true"; return True if it changed."""
    if ns_inst.labels.get(LABEL_INCLUDED_NAMESPACE) == "true":
        return False
    log.info("Adding included-namespace label to %s", ns_inst.name)
    ns_inst.set_label(LABEL_INCLUDED_NAMESPACE, "true")
    return True


def remove_included_namespace_label(ns_inst: NamespaceObject) -> bool:
    """Remove the included-namespace label if present; return True if it was removed."""
    if LABEL_INCLUDED_NAMESPACE not in ns_inst.labels:
        return False
    log.info("Illegal included-namespace label found on %s; removing", ns_inst.name)
    del ns_inst.labels[LABEL_INCLUDED_NAMESPACE]
    return True


def update_finalizers(
    inst: HierarchyConfiguration, ns_inst: NamespaceObject, anchors: Sequence[str]
) -> None:
    """Keep the singleton undeletable while its namespace holds subnamespace anchors.

    The exception is a deletion of the singleton alone, outside a cascading
    deletion of its namespace: then the finalizers are removed to let it go.
    """
    if not anchors:
        if inst.finalizers:
            log.debug("Removing finalizers since there are no longer any anchors")
        inst.finalizers = []
    elif inst.deletion_timestamp is not None and ns_inst.deletion_timestamp is None:
        log.info("Removing finalizers to allow a single deletion of the singleton")
        inst.finalizers = []
    else:
        if not inst.finalizers:
            log.info("Adding finalizers since there's at least one anchor in the namespace")
        inst.finalizers = [FINALIZER_HAS_SUBNAMESPACE]


def external_tree_labels(labels: Mapping[str, str], name: str) -> dict[str, int]:
    """Return the tree depths found in an external namespace's labels, plus itself at 0."""
    depths: dict[str, int] = {}
    for key, value in labels.items():
        if key.endswith(LABEL_TREE_DEPTH_SUFFIX) and LABEL_TREE_DEPTH_SUFFIX:
            ancestor = key[: -len(LABEL_TREE_DEPTH_SUFFIX)]
            try:
                depths[ancestor] = int(value)
            except ValueError:
                depths[ancestor] = 0
    depths[name] = 0
    return depths