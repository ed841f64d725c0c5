"""Transport-neutral form of a request, produced by the request models."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional, Tuple


@dataclass(frozen=True)
class FormFile:
    field_name: str
    file_name: str
    contents: bytes


@dataclass(frozen=True)
class SerializedRequest:
    method: str
    path: str
    params: Tuple[Tuple[str, str], ...] = ()
    json_body: Optional[str] = None
    form_fields: Tuple[Tuple[str, str], ...] = ()
    files: Tuple[FormFile, ...] = ()
    headers: Tuple[Tuple[str, str], ...] = ()

    def url(self, base_url: str) -> str:
        return f"{base_url.rstrip('/')}/{self.path.lstrip('/')}"

    @property
    def is_multipart(self) -> bool:
        return bool(self.files)

    def header_map(self) -> Dict[str, str]:
        return dict(self.headers)


__all__ = ["FormFile", "SerializedRequest"]
