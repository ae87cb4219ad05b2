import os

SECRET_KEY = "test-secret"
TOKEN_TTL_DAYS = 7

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "staffdesk_test"),
}

STORAGE_CONFIG = {
    "endpoint_url": "http://localhost:9000",
    "access_key": "test",
    "secret_key": "test",
    "region": "us-east-1",
    "bucket": "staffdesk-test",
    "acl": "",
    "public_base_url": "",
}

DEFAULT_PAGE_SIZE = 5
MAX_PAGE_SIZE = 10
MAX_UPLOAD_BYTES = 100 * 1024

DEBUG = False
TESTING = True
LOG_LEVEL = "WARNING"

AUTO_INIT_DB = False
