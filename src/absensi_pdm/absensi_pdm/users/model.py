from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Optional

from ..core.enums import Role


@dataclass(frozen=True)
class Account:
    """Entri tabel akun tetap (satu admin pusat, lima admin unit)."""

    username: str
    name: str
    password_hash: str
    role: Role
    unit: Optional[str] = None


@dataclass(frozen=True)
class User:
    """Pengguna yang sedang login; hanya hidup di sesi, tidak disimpan sebagai entitas.

    Jika ``unit`` terisi, semua baca/tulis dibatasi ke peserta unit tersebut.
    """

    username: str
    name: str
    role: Role
    unit: Optional[str] = None

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN

    def to_dict(self) -> dict:
        data = asdict(self)
        data["role"] = self.role.value
        if self.unit is None:
            data.pop("unit")
        return data

    @classmethod
    def from_dict(cls, data: dict) -> "User":
        return cls(
            username=str(data["username"]),
            name=str(data.get("name") or data["username"]),
            role=Role(data.get("role", Role.USER.value)),
            unit=data.get("unit") or None,
        )
