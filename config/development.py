import os

from config.config import DB_CONFIG, Config

SECRET_KEY = Config.SECRET_KEY

STORAGE_BACKEND = Config.STORAGE_BACKEND
STORAGE_PATH = Config.STORAGE_PATH

DEBUG = True
LOG_LEVEL = "DEBUG"

# If enabled with the mysql backend, the app_storage table is created on startup.
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "1")))
REPORT_YEAR = Config.REPORT_YEAR
