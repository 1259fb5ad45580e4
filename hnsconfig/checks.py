"""Checks that must be made against the API server before a hierarchy change is allowed."""

from __future__ import annotations

import logging
import os
import subprocess
from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass, field
from enum import Enum
from typing import Protocol

from hnsconfig.admission import AdmissionResponse, StatusReason, allow, deny
from hnsconfig.objects import META_GROUP

log = logging.getLogger(__name__)

_DEFAULT_POD_NAMESPACE = "hnc-system"


class CheckType(Enum):
    """What a server check verifies."""

    AUTHZ = "authz"
    """The user is an admin of the namespace."""
    MISSING = "missing"
    """The namespace does not exist on the server."""


@dataclass(frozen=True)
class ServerCheck:
    """A check to run against the server once the forest lock is released."""

    name: str
    check_type: CheckType
    reason: str


@dataclass
class UserInfo:
    """The identity of the user making a request."""

    username: str = ""
    uid: str = ""
    groups: list[str] = field(default_factory=list)
    extra: dict[str, list[str]] = field(default_factory=dict)


class _Namespace(Protocol):
    """The view of a forest namespace that the server checks need."""

    name: str

    def exists(self) -> bool: ...

    def ancestry_names(self) -> Sequence[str]: ...


class _Server(Protocol):
    def exists(self, name: str) -> bool: ...

    def is_admin(self, user: UserInfo | None, name: str) -> bool: ...


class ServerClient:
    """Answers existence and authorization questions by asking kubectl."""

    def __init__(self, kubectl: str = "kubectl") -> None:
        self.kubectl = kubectl

    def _run(self, *args: str) -> subprocess.CompletedProcess[str]:
        return subprocess.run(
            [self.kubectl, *args], capture_output=True, text=True, check=False
        )

    def exists(self, name: str) -> bool:
        """Return True if the namespace exists on the server."""
        proc = self._run("get", "namespace", name, "-o", "name")
        if proc.returncode == 0:
            return True
        if "NotFound" in proc.stderr or "not found" in proc.stderr:
            return False
        raise RuntimeError(
            proc.stderr.strip() or f"kubectl exited with status {proc.returncode}"
        )

    def is_admin(self, user: UserInfo | None, name: str) -> bool:
        """Return True if the user may update the hierarchy configuration of the namespace."""
        args = [
            "auth",
            "can-i",
            "update",
            f"hierarchyconfigurations.{META_GROUP}",
            "-n",
            name,
        ]
        if user is not None:
            if user.username:
                args += ["--as", user.username]
            for group in user.groups:
                args += ["--as-group", group]
            if user.uid:
                args += ["--as-uid", user.uid]
        proc = self._run(*args)
        words = proc.stdout.split()
        answer = words[0].lower() if words else ""
        if answer == "yes":
            return True
        if answer == "no":
            return False
        raise RuntimeError(
            proc.stderr.strip() or f"kubectl exited with status {proc.returncode}"
        )


def _same(a: _Namespace | None, b: _Namespace | None) -> bool:
    if a is None or b is None:
        return a is b
    return a is b or a.name == b.name


def get_server_checks(
    ns: _Namespace,
    cur_parent: _Namespace | None,
    new_parent: _Namespace | None,
    is_managed: Callable[[str], bool],
) -> list[ServerCheck]:
    """Return the server checks needed to move ``ns`` from ``cur_parent`` to ``new_parent``.

    The user must be an admin of the most recent common ancestor of the old and
    new parents when they share a tree; otherwise of the old root and of the new
    parent. A current parent missing from the forest asks for a missing check.
    """
    if _same(cur_parent, new_parent):
        return []

    if cur_parent is None or not is_managed(cur_parent.name):
        if new_parent is not None:
            return [ServerCheck(new_parent.name, CheckType.AUTHZ, "proposed parent")]
        return []

    if not cur_parent.exists():
        return [
            ServerCheck(cur_parent.name, CheckType.MISSING, "current missing parent")
        ]

    cur_chain = list(cur_parent.ancestry_names())
    if new_parent is None:
        return [ServerCheck(cur_chain[0], CheckType.AUTHZ, "current root ancestor")]

    new_chain = list(new_parent.ancestry_names())
    if cur_chain[0] != new_chain[0]:
        return [
            ServerCheck(cur_chain[0], CheckType.AUTHZ, "current root ancestor"),
            ServerCheck(new_parent.name, CheckType.AUTHZ, "proposed parent"),
        ]

    mrca = cur_chain[0]
    for cur, new in zip(cur_chain[1:], new_chain[1:]):
        if cur != new:
            break
        mrca = cur
    reason = (
        f'most recent common ancestor of current parent "{cur_parent.name}" '
        f'and proposed parent "{new_parent.name}"'
    )
    return [ServerCheck(mrca, CheckType.AUTHZ, reason)]


def check_server(
    server: _Server | None, user: UserInfo | None, checks: Iterable[ServerCheck]
) -> AdmissionResponse:
    """Run the server checks in order and return the first denial, or an allowance."""
    if server is None:
        return allow("")

    for check in checks:
        if check.check_type is CheckType.MISSING:
            log.info("Checking existence of %s (%s)", check.name, check.reason)
            try:
                exists = server.exists(check.name)
            except Exception as err:  # noqa: BLE001 - any server failure denies
                return deny(
                    StatusReason.UNKNOWN,
                    f'while checking existance for "{check.name}", the {check.reason}: {err}',
                )
            if exists:
                return deny(
                    StatusReason.SERVICE_UNAVAILABLE,
                    f'HNC has not reconciled namespace "{check.name}" yet - '
                    "please try again in a few moments.",
                )
        else:
            log.info("Checking authz on %s (%s)", check.name, check.reason)
            try:
                allowed = server.is_admin(user, check.name)
            except Exception as err:  # noqa: BLE001 - any server failure denies
                return deny(
                    StatusReason.UNKNOWN,
                    f'while checking authz for "{check.name}", the {check.reason}: {err}',
                )
            if not allowed:
                username = user.username if user is not None else ""
                return deny(
                    StatusReason.UNAUTHORIZED,
                    f"User {username} is not authorized to modify the subtree of "
                    f"{check.name}, which is the {check.reason}",
                )

    return allow("")


def is_hnc_service_account(user: UserInfo | None) -> bool:
    """Return True if the user belongs to the service accounts of HNC's own namespace."""
    if user is None:
        return False
    pod_namespace = os.environ.get("POD_NAMESPACE", _DEFAULT_POD_NAMESPACE)
    return f"system:serviceaccounts:{pod_namespace}" in user.groups