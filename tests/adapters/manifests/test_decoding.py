from __future__ import annotations

import pytest

from depster.adapters.manifests import decode_yaml_or_json
from depster.domain.errors import ManifestDecodeError


def test_decodes_json_object() -> None:
    assert decode_yaml_or_json('  {"kind": "Namespace", "metadata": {"name": "ns1"}}\n') == {
        "kind": "Namespace",
        "metadata": {"name": "ns1"},
    }


def test_decodes_first_yaml_document() -> None:
    text = "---\nkind: Namespace\nmetadata:\n  name: ns1\n---\nkind: Namespace\n"

    assert decode_yaml_or_json(text) == {"kind": "Namespace", "metadata": {"name": "ns1"}}


@pytest.mark.parametrize(
    ("text", "message"),
    [
        ("{not json", "invalid JSON"),
        ("kind: [unclosed", "invalid YAML"),
        ("", "no document found"),
        ("- a\n- b\n", "expected an object"),
    ],
)
def test_rejects_invalid_payloads(text: str, message: str) -> None:
    with pytest.raises(ManifestDecodeError, match=message):
        decode_yaml_or_json(text)
