"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

STORAGE_KEY_PARTICIPANTS = "pdm_participants"
STORAGE_KEY_ATTENDANCE = "pdm_attendance"
STORAGE_KEY_PERIODS = "pdm_periods"
STORAGE_KEY_CURRENT_USER = "pdm_current_user"

DEFAULT_REPORT_YEAR = 2026
CHECKIN_PIN_HOUR = 9
PARTICIPANTS_PER_PAGE = 30
ALL_UNITS = "Semua"

MONTH_NAMES = (
    "Januari",
    "Februari",
    "Maret",
    "April",
    "Mei",
    "Juni",
    "Juli",
    "Agustus",
    "September",
    "Oktober",
    "November",
    "Desember",
)
