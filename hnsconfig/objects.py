"""In-memory forms of the hierarchy configuration singleton and of namespaces."""

from __future__ import annotations

import copy as _copy
from dataclasses import dataclass, field
from datetime import datetime

META_GROUP = "hnc.x-k8s.io"
SINGLETON = "hierarchy"
LABEL_TREE_DEPTH_SUFFIX = ".tree.hnc.x-k8s.io/depth"
LABEL_INCLUDED_NAMESPACE = "hnc.x-k8s.io/included-namespace"
ANNOTATION_MANAGED_BY = "hnc.x-k8s.io/managed-by"
ANNOTATION_NONE_SELECTOR = "propagate.hnc.x-k8s.io/none"
SUBNAMESPACE_OF = "hnc.x-k8s.io/subnamespace-of"
FINALIZER_HAS_SUBNAMESPACE = "hnc.x-k8s.io/hasSubnamespace"

CONDITION_ACTIVITIES_HALTED = "ActivitiesHalted"
CONDITION_BAD_CONFIGURATION = "BadConfiguration"

REASON_ANCESTOR = "AncestorHaltActivities"
REASON_DELETING_CRD = "DeletingCRD"
REASON_IN_CYCLE = "InCycle"
REASON_PARENT_MISSING = "ParentMissing"
REASON_ILLEGAL_PARENT = "IllegalParent"
REASON_ANCHOR_MISSING = "SubnamespaceAnchorMissing"


@dataclass
class Condition:
    """A condition reported in the status of a hierarchy configuration."""

    type: str
    reason: str
    message: str = ""


@dataclass
class HierarchyConfiguration:
    """The per-namespace hierarchy singleton: spec, status and the metadata that matters."""

    namespace: str
    name: str = SINGLETON
    parent: str = ""
    allow_cascading_deletion: bool = False
    children: list[str] = field(default_factory=list)
    conditions: list[Condition] = field(default_factory=list)
    finalizers: list[str] = field(default_factory=list)
    creation_timestamp: datetime | None = None
    deletion_timestamp: datetime | None = None

    def copy(self) -> HierarchyConfiguration:
        """Return a deep copy that shares no mutable state with this one."""
        return _copy.deepcopy(self)


@dataclass
class NamespaceObject:
    """A namespace as stored on the server: name, labels, annotations and timestamps."""

    name: str
    labels: dict[str, str] = field(default_factory=dict)
    annotations: dict[str, str] = field(default_factory=dict)
    creation_timestamp: datetime | None = None
    deletion_timestamp: datetime | None = None

    def copy(self) -> NamespaceObject:
        """Return a deep copy that shares no mutable state with this one."""
        return _copy.deepcopy(self)

    def set_label(self, key: str, value: str) -> None:
        """Set a label, overwriting any existing value."""
        self.labels[key] = value