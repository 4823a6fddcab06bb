"""Label and annotation maps, and merging of object metadata."""

from __future__ import annotations

from typing import Any, Mapping


class Labels(dict):
    """A mutable label map."""

    def add(self, key: str, value: str) -> None:
        self[key] = value

    def add_label(self, label: Mapping[str, str] | None) -> None:
        if label:
            self.update(label)


class Annotations(dict):
    """A mutable annotation map."""

    def add(self, key: str, value: str) -> None:
        self[key] = value

    def add_annotation(self, annotation: Mapping[str, str] | None) -> None:
        if annotation:
            self.update(annotation)


def merge_slices(new: list[str] | None, old: list[str] | None) -> list[str]:
    """Append the entries of old that new lacks, keeping order."""
    result = list(new or [])
    seen = set(result)
    result.extend(item for item in old or [] if item not in seen)
    return result


def _merge_owner_references(new: list | None, old: list | None) -> list:
    result: list = []
    for ref in list(new or []) + list(old or []):
        if ref not in result:
            result.append(ref)
    return result


def merge_metadata(new: dict[str, Any], old: Mapping[str, Any]) -> None:
    """Merge old metadata into new in place; new wins on conflicting keys."""
    new["resourceVersion"] = old.get("resourceVersion", "")
    new["finalizers"] = merge_slices(new.get("finalizers"), old.get("finalizers"))
    new["labels"] = {**(old.get("labels") or {}), **(new.get("labels") or {})}
    new["annotations"] = {**(old.get("annotations") or {}), **(new.get("annotations") or {})}
    new["ownerReferences"] = _merge_owner_references(
        new.get("ownerReferences"), old.get("ownerReferences")
    )