import pytest

from srops import load
from srops.model import COMPONENT_LABEL_KEY, OWNER_REFERENCE_LABEL, ComponentKind, ComponentSpec


@pytest.mark.parametrize(
    "kind, want", [(ComponentKind.BE, "test-be"), (ComponentKind.CN, "test-cn"),
                   (ComponentKind.FE, "test-fe")],
)
def test_name(kind, want):
    assert load.name("test", ComponentSpec(kind=kind)) == want


@pytest.mark.parametrize("kind, want", [(ComponentKind.BE, "be"), (ComponentKind.CN, "cn"),
                                        (ComponentKind.FE, "fe")])
def test_labels(kind, want):
    assert load.labels("test", ComponentSpec(kind=kind)) == {
        OWNER_REFERENCE_LABEL: "test",
        COMPONENT_LABEL_KEY: want,
    }


def test_annotations():
    assert load.annotations() == {}


def test_selector():
    assert load.selector("test", ComponentKind.FE) == {
        OWNER_REFERENCE_LABEL: "test-fe",
        COMPONENT_LABEL_KEY: "fe",
    }
    assert load.name("test", None) == ""