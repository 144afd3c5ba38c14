import os


class Config:
    SECRET_KEY = os.environ.get("SECRET_KEY") or "absensi-pdm-dev-secret"

    # json | mysql | memory
    STORAGE_BACKEND = os.environ.get("STORAGE_BACKEND", "json").lower()
    STORAGE_PATH = os.environ.get("STORAGE_PATH", "instance/storage.json")

    DB_USER = os.environ.get("DB_USER", "root")
    DB_PASSWORD = os.environ.get("DB_PASSWORD", "")
    DB_HOST = os.environ.get("DB_HOST", "localhost")
    DB_PORT = int(os.environ.get("DB_PORT", "3306"))
    DB_NAME = os.environ.get("DB_NAME", "absensi_pdm")

    AUTO_INIT_DB = bool(int(os.environ.get("AUTO_INIT_DB", "0")))
    REPORT_YEAR = int(os.environ.get("REPORT_YEAR", "2026"))
    LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO").upper()


DB_CONFIG = {
    "host": Config.DB_HOST,
    "port": Config.DB_PORT,
    "user": Config.DB_USER,
    "password": Config.DB_PASSWORD,
    "database": Config.DB_NAME,
}
