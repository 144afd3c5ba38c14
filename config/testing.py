SECRET_KEY = "test-secret"

STORAGE_BACKEND = "memory"
DB_CONFIG = {}

DEBUG = False
TESTING = True
LOG_LEVEL = "WARNING"

AUTO_INIT_DB = False
REPORT_YEAR = 2026
