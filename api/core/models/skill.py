from typing import Any, Dict, Mapping


class Skill:
    """Property mapping for ``(:Skill)`` nodes."""

    properties = ("id", "name", "normalized")

    @classmethod
    def from_node(cls, node: Mapping[str, Any]) -> Dict[str, Any]:
        data = dict(node)
        return {key: data.get(key) for key in cls.properties}
