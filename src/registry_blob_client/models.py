"""Models for JSON config blobs."""

from dataclasses import dataclass, field
from typing import Any, Optional


@dataclass
class ImageConfig:
    """OCI / Docker image configuration blob.

    Only the commonly used top-level fields are modelled; the runtime
    ``config`` section and ``rootfs`` are kept as plain dictionaries.
    """

    architecture: str = ""
    os: str = ""
    created: Optional[str] = None
    author: Optional[str] = None
    variant: Optional[str] = None
    config: dict[str, Any] = field(default_factory=dict)
    rootfs: dict[str, Any] = field(default_factory=dict)
    history: list[dict[str, Any]] = field(default_factory=list)

    @property
    def diff_ids(self) -> list[str]:
        return list(self.rootfs.get("diff_ids", []))

    @property
    def labels(self) -> dict[str, str]:
        return dict((self.config or {}).get("Labels") or {})
