from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """Peran pengguna untuk pembatasan akses."""

    ADMIN = "admin"
    USER = "user"


class AttendanceStatus(str, Enum):
    """Status kehadiran yang disimpan pada setiap catatan absensi."""

    PRESENT = "hadir"
    SICK = "sakit"
    EXCUSED = "izin"

    @property
    def label(self) -> str:
        return {
            AttendanceStatus.PRESENT: "Hadir",
            AttendanceStatus.SICK: "Sakit",
            AttendanceStatus.EXCUSED: "Izin",
        }[self]
