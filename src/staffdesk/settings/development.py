import os

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")
TOKEN_TTL_DAYS = int(os.getenv("TOKEN_TTL_DAYS", "7"))

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "staffdesk"),
}

# Local MinIO by default; leave STORAGE_ENDPOINT_URL empty to talk to AWS S3.
STORAGE_CONFIG = {
    "endpoint_url": os.getenv("STORAGE_ENDPOINT_URL", "http://localhost:9000"),
    "access_key": os.getenv("AWS_ACCESS_KEY_ID", "minioadmin"),
    "secret_key": os.getenv("AWS_SECRET_ACCESS_KEY", "minioadmin"),
    "region": os.getenv("AWS_REGION", "us-east-1"),
    "bucket": os.getenv("S3_BUCKET_NAME", "staffdesk"),
    "acl": os.getenv("STORAGE_ACL", ""),
    "public_base_url": os.getenv("STORAGE_PUBLIC_BASE_URL", ""),
}

DEFAULT_PAGE_SIZE = int(os.getenv("DEFAULT_PAGE_SIZE", "5"))
MAX_PAGE_SIZE = int(os.getenv("MAX_PAGE_SIZE", "100"))
MAX_UPLOAD_BYTES = int(os.getenv("MAX_UPLOAD_BYTES", str(100 * 1024)))

DEBUG = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")

# If enabled, app will apply schema.sql on startup (idempotent: CREATE IF NOT EXISTS)
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "1")))
