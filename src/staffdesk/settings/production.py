import os

SECRET_KEY = os.getenv("SECRET_KEY", "")
TOKEN_TTL_DAYS = int(os.getenv("TOKEN_TTL_DAYS", "7"))

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "staffdesk"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "staffdesk"),
}

STORAGE_CONFIG = {
    "endpoint_url": os.getenv("STORAGE_ENDPOINT_URL", ""),
    "access_key": os.getenv("AWS_ACCESS_KEY_ID", ""),
    "secret_key": os.getenv("AWS_SECRET_ACCESS_KEY", ""),
    "region": os.getenv("AWS_REGION", "us-east-1"),
    "bucket": os.getenv("S3_BUCKET_NAME", ""),
    "acl": os.getenv("STORAGE_ACL", "public-read"),
    "public_base_url": os.getenv("STORAGE_PUBLIC_BASE_URL", ""),
}

DEFAULT_PAGE_SIZE = int(os.getenv("DEFAULT_PAGE_SIZE", "5"))
MAX_PAGE_SIZE = int(os.getenv("MAX_PAGE_SIZE", "100"))
MAX_UPLOAD_BYTES = int(os.getenv("MAX_UPLOAD_BYTES", str(100 * 1024)))

DEBUG = False
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))
