from __future__ import annotations

from typing import Any, Dict, List

import pytest

from cuin.models import Instance
from tests._fixtures.payload_builder import (
    PayloadBuilder,
    external,
    internal,
    make_instance,
    raw_instance,
    ui_package,
)


@pytest.fixture
def payload_builder() -> PayloadBuilder:
    """Provide an empty payload builder rooted at /repo."""
    return PayloadBuilder()


@pytest.fixture
def sample_document() -> Dict[str, Any]:
    """A small analyzer document covering every package type."""
    return (
        PayloadBuilder()
        .component(
            "button",
            "Button",
            external("ui"),
            [
                raw_instance("src/a.tsx", {"variant": "outline", "size": "sm"}, external("ui")),
                raw_instance("src/b.tsx", {"variant": "outline"}, external("ui")),
                raw_instance("src/c.tsx", {"variant": "solid"}, external("ui")),
                raw_instance("src/d.tsx", {}, external("ui")),
            ],
        )
        .component("card", "Card", external("ui"), [raw_instance("src/a.tsx")])
        .component("layout", "Layout", internal("app"), [raw_instance(), raw_instance()])
        .component("div", "div", None, [raw_instance()])
        .build()
    )


@pytest.fixture
def variant_instances() -> List[Instance]:
    """Four usages: outline, outline, solid and one without a variant."""
    return [
        make_instance({"variant": "outline", "size": "sm"}, ui_package()),
        make_instance({"variant": "outline"}, ui_package()),
        make_instance({"variant": "solid"}, ui_package("legacy-ui", "0.9.0")),
        make_instance({}),
    ]
