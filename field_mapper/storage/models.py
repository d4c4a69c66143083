import copy
from dataclasses import dataclass, field
from typing import Any


@dataclass
class Snapshot:
    """The whole persisted document: two ordered collections of raw records."""

    processes: list[dict[str, Any]] = field(default_factory=list)
    annotations: list[dict[str, Any]] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {"processes": self.processes, "annotations": self.annotations}

    def copy(self) -> "Snapshot":
        return Snapshot(
            processes=copy.deepcopy(self.processes),
            annotations=copy.deepcopy(self.annotations),
        )

    @classmethod
    def from_dict(cls, data: Any) -> "Snapshot":
        if not isinstance(data, dict):
            raise ValueError("snapshot document must be an object")
        processes = data.get("processes", [])
        annotations = data.get("annotations", [])
        if not isinstance(processes, list) or not isinstance(annotations, list):
            raise ValueError("'processes' and 'annotations' must be lists")
        return cls(processes=processes, annotations=annotations)
