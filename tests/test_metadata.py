from srops.metadata import Annotations, Labels, merge_metadata, merge_slices


def test_merge_metadata():
    new = {
        "labels": {"new": "new", "exiting": "new"},
        "annotations": {"new": "new", "exiting": "new"},
        "finalizers": ["new", "exiting"],
        "ownerReferences": [{"name": "new"}, {"name": "exiting"}],
    }
    old = {
        "labels": {"old": "old", "exiting": "old"},
        "annotations": {"old": "old", "exiting": "old"},
        "finalizers": ["old", "exiting"],
        "ownerReferences": [{"name": "old"}, {"name": "exiting"}],
    }
    merge_metadata(new, old)
    assert new["labels"] == {"new": "new", "exiting": "new", "old": "old"}
    assert new["annotations"] == {"new": "new", "exiting": "new", "old": "old"}
    assert new["finalizers"] == ["new", "exiting", "old"]
    assert new["ownerReferences"] == [{"name": "new"}, {"name": "exiting"}, {"name": "old"}]


def test_merge_slices_none():
    assert merge_slices(None, ["a"]) == ["a"]


def test_labels_and_annotations():
    labels = Labels()
    labels.add("a", "1")
    labels.add_label(None)
    labels.add_label({"b": "2"})
    assert labels == {"a": "1", "b": "2"}
    anno = Annotations({"x": "1"})
    anno.add_annotation({"x": "2"})
    anno.add("y", "3")
    assert anno == {"x": "2", "y": "3"}