# srops

Helpers for describing a StarRocks-style cluster (FE, BE, CN and FE proxy
components) and turning it into Kubernetes manifests. Resources are plain
Python dictionaries shaped like Kubernetes objects, so they can be serialised
to JSON or YAML and handed to whatever client you use.

## Modules

- `srops.model`: `Cluster`, `ComponentSpec`, `ServiceSpec`, `ServicePortSpec`,
  `StorageVolume`, `MountInfo`, `ConfigMapInfo`, the `ComponentKind` and
  `AutoscalerVersion` enums, and `RolloutError`. `Cluster.controller_reference()`
  returns an owner reference marking the cluster as controller.
- `srops.hashing`: `spew_format` renders an object as a typed, key-sorted dump;
  `hash_object` returns the decimal 32-bit FNV-1a hash of that dump.
- `srops.metadata`: `Labels` and `Annotations` (dicts with `add`,
  `add_label` / `add_annotation`), `merge_slices`, and `merge_metadata`, which
  merges old metadata into new in place with new winning on conflicts.
- `srops.ports`: `parse_properties` (keys lower-cased), `resolve_config_map`
  and `get_port`, which returns the configured port or its default from
  `DEF_MAP`.
- `srops.load`: `name`, `labels`, `selector` and `annotations` for a
  component's workload.
- `srops.services`: `build_external_service` (annotated with a content hash),
  `fe_service_ports`, `be_service_ports`, `cn_service_ports`,
  `service_annotations`, `service_deep_equal` and `have_equal_owner_reference`.
  `build_external_service` raises `ValueError` when the cluster lacks the
  requested component.
- `srops.statefulsets`: `statefulset_deep_equal`, which compares by content
  hash and records the new hash in the new object's annotations, and
  `merge_statefulsets`.
- `srops.autoscaler`: `PodAutoscalerParams` and
  `build_horizontal_pod_autoscaler` for `autoscaling/v1`, `v2` and `v2beta2`
  (v2beta2 when no version is given).
- `srops.service_templates`: `make_search_service` (a headless service),
  `search_service_name` and `external_service_name`.
- `srops.deployment`: `make_deployment`, `get_deployment_condition` and
  `rollout_status`.
- `srops.statefulset`: `pvc_list`, `make_statefulset` and `rollout_status`.

## Example

```python
from srops.model import Cluster, ComponentSpec, ComponentKind
from srops.statefulset import make_statefulset

fe = ComponentSpec(kind=ComponentKind.FE, replicas=3)
cluster = Cluster(name="demo", namespace="db", fe=fe)

sts = make_statefulset(cluster, fe, {})
print(sts["metadata"]["name"])          # demo-fe
print(sts["spec"]["serviceName"])       # demo-fe-search
```

Both `rollout_status` functions return a message and a done flag.
`srops.deployment.rollout_status` raises `RolloutError` when the deployment
exceeded its progress deadline; `srops.statefulset.rollout_status` raises it
when the update strategy is not `RollingUpdate`. `pvc_list` raises
`ValueError` for a storage size that is not a valid quantity.

## What it does not do

The package only builds and compares manifests. It does not connect to a
Kubernetes cluster, and has no code to create, update, patch or delete
resources there. It does not build pod templates (containers, probes, volume
mounts, environment variables or security contexts): pass your own pod
template to `make_deployment` or `make_statefulset`. There is no command-line
tool.

## Tests

```
pip install -e ".[test]"
pytest
```