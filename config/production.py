import os

from config.config import db_config_from_env, env_flag

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")
# No default: create_app refuses to start without a signing secret.
JWT_SECRET = os.getenv("JWT_SECRET")
TOKEN_TTL_SECONDS = int(os.getenv("TOKEN_TTL_SECONDS", "3600"))

PORT = int(os.getenv("PORT", "3000"))

DB_CONFIG = db_config_from_env()

UPLOAD_FOLDER = os.getenv("UPLOAD_FOLDER", "uploads")
MAX_PHOTO_BYTES = int(os.getenv("MAX_PHOTO_BYTES", str(5 * 1024 * 1024)))

DEBUG = False
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

AUTO_INIT_DB = env_flag("AUTO_INIT_DB", "0")
