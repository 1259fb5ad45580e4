# hnsconfig

`hnsconfig` holds the building blocks for keeping a tree of namespaces in
order. Each namespace carries a hierarchy configuration singleton that names
its parent. This package models those objects and builds admission responses
for proposed changes. It works out which server checks a change of parent
needs and runs them. It also keeps the labels and finalizers on namespaces and
singletons up to date.

It needs only the Python standard library, version 3.10 or later.

## Modules

### `hnsconfig.admission`

Admission responses carry a human-readable message, a machine-readable reason
and an HTTP-style code.

- `StatusReason`: the reasons a request can be denied for.
- `Status`: the result of a response, with `code`, `message`, `reason` and a
  list of `causes`.
- `StatusCause`: one cause of an invalid request, with its `message` and `field`.
- `AdmissionResponse`: a response, with `allowed` and `result`.
- `allow(msg)`: allows a request with code 0 and the given message.
- `deny(reason, msg)`: denies a request and sets the code that matches the
  reason. A reason string that is not a `StatusReason` is recorded as
  `StatusReason.UNKNOWN`, with code 500.
- `deny_invalid(field, msg)`: denies a request as `Invalid` and repeats the
  message in a single cause for the given field.
- `code_from_reason(reason)` maps each reason to a code:

| reason             | code |
|--------------------|------|
| BadRequest         | 400  |
| Unauthorized       | 401  |
| Forbidden          | 403  |
| Conflict           | 409  |
| Invalid            | 422  |
| ServiceUnavailable | 503  |
| anything else      | 500  |

### `hnsconfig.objects`

- `HierarchyConfiguration`: the per-namespace singleton. Its fields are
  `namespace`, `name` (default `"hierarchy"`), `parent`,
  `allow_cascading_deletion`, `children`, `conditions`, `finalizers`,
  `creation_timestamp` and `deletion_timestamp`.
- `NamespaceObject`: a namespace with its `name`, `labels`, `annotations` and
  timestamps. `set_label(key, value)` sets or overwrites a label.
- `Condition`: a status condition, with `type`, `reason` and `message`.

Both object classes have `copy()`, which returns a deep copy. The module also
defines the label, annotation, finalizer, condition and reason names it uses,
such as `LABEL_TREE_DEPTH_SUFFIX` (`.tree.hnc.x-k8s.io/depth`),
`LABEL_INCLUDED_NAMESPACE`, `FINALIZER_HAS_SUBNAMESPACE` and
`CONDITION_ACTIVITIES_HALTED`.

### `hnsconfig.checks`

`get_server_checks(ns, cur_parent, new_parent, is_managed)` works out which
namespaces the user must administer to move `ns` from `cur_parent` to
`new_parent`. The namespace arguments need a `name` attribute and `exists()`
and `ancestry_names()` methods. A parent may be `None`. `is_managed` is called
with a namespace name.

The result is a list of `ServerCheck(name, check_type, reason)`:

| situation | checks returned |
|-----------|-----------------|
| the parent does not change | none |
| the namespace is a root, or its current parent is unmanaged | an `AUTHZ` check on the new parent, if there is one |
| the current parent does not exist | a `MISSING` check on it |
| the namespace is becoming a root | an `AUTHZ` check on the current root |
| the old and new parents are in different trees | `AUTHZ` checks on the current root and on the new parent |
| the old and new parents share a tree | one `AUTHZ` check on their most recent common ancestor |

`check_server(server, user, checks)` runs the checks in order and returns the
first denial, or an allowance. The server is passed in as `server`:

- If `server` is `None`, the request is allowed.
- If a `MISSING` check finds the namespace still exists, the request is denied
  with code 503.
- If an `AUTHZ` check fails, the request is denied with code 401.
- If the server raises an exception, the request is denied with code 500.

`server` can be any object with `exists(name)` and `is_admin(user, name)`.
`ServerClient(kubectl="kubectl")` is one such object, and it runs `kubectl`:

- `exists(name)` runs `kubectl get namespace NAME -o name`. A "not found" error
  means the namespace does not exist.
- `is_admin(user, name)` runs
  `kubectl auth can-i update hierarchyconfigurations.hnc.x-k8s.io -n NAME`.
  It impersonates the user's name, groups and UID through `--as`, `--as-group`
  and `--as-uid`.

Both methods raise `RuntimeError` when `kubectl` gives no usable answer.

`UserInfo` holds `username`, `uid`, `groups` and `extra`.
`is_hnc_service_account(user)` is true when the user belongs to the group
`system:serviceaccounts:<ns>`. Here `<ns>` is taken from the `POD_NAMESPACE`
environment variable and defaults to `hnc-system`.

### `hnsconfig.labels`

- `add_included_namespace_label(ns_inst)`: sets the included-namespace label to
  `"true"` and returns whether anything changed.
- `remove_included_namespace_label(ns_inst)`: removes that label and returns
  whether it was present.
- `update_finalizers(inst, ns_inst, anchors)`: sets the singleton's finalizers:
  - If there are no anchors, the finalizers are cleared.
  - If the singleton alone is being deleted, and not its namespace, the
    finalizers are cleared.
  - Otherwise the finalizers are set to the has-subnamespace finalizer.
- `external_tree_labels(labels, name)`: reads the tree-depth labels of an
  externally managed namespace into a mapping from ancestor name to depth. A
  value that is not an integer counts as 0. The namespace itself is added at
  depth 0.

## What this package does not do

There is no in-memory tree of namespaces here. The package has no admission
handler that takes a whole request and checks it against such a tree for
cycles, missing or unmanaged parents, or conflicting objects. It has no
reconciliation loop that reads namespaces and singletons from a server and
writes them back. It also provides no server, webhook endpoint or command-line
tool. The functions above are the pieces such a program would call. Apart from
`ServerClient`, which runs `kubectl`, nothing here talks to a cluster.